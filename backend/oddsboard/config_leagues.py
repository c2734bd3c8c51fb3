"""
backend/oddsboard/config_leagues.py

Purpose:
    Static league configuration: provider identifiers per league and the
    per-sport team synonym tables used by the name canonicalizer.

    Table keys and values are already in normalized form (uppercase, only
    A-Z, 0-9 and single spaces). Every canonical value must map to itself,
    so no value may also appear as a key for a different team.
"""

from types import MappingProxyType

# The Odds API sport keys
ODDS_API_SPORT_KEYS: dict[str, str] = {
    "MLB": "baseball_mlb",
    "NBA": "basketball_nba",
    "NHL": "icehockey_nhl",
    "WNBA": "basketball_wnba",
    "NFL": "americanfootball_nfl",
    "EPL": "soccer_epl",
    "MLS": "soccer_usa_mls",
}

SPORT_KEY_TO_LEAGUE: dict[str, str] = {v: k for k, v in ODDS_API_SPORT_KEYS.items()}

# ESPN scoreboard paths
ESPN_PATHS: dict[str, str] = {
    "MLB": "baseball/mlb",
    "NBA": "basketball/nba",
    "NHL": "hockey/nhl",
    "WNBA": "basketball/wnba",
    "NFL": "football/nfl",
    "EPL": "soccer/eng.1",
    "MLS": "soccer/usa.1",
}


def _table(*teams: tuple[str, ...]) -> MappingProxyType:
    """Build a read-only alias -> canonical map from (canonical, *aliases) tuples."""
    table: dict[str, str] = {}
    for canonical, *aliases in teams:
        for alias in aliases:
            if alias in table and table[alias] != canonical:
                raise ValueError(f"alias {alias!r} maps to both {table[alias]!r} and {canonical!r}")
            table[alias] = canonical
    return MappingProxyType(table)


MLB_SYNONYMS = _table(
    ("ARIZONA DIAMONDBACKS", "ARI", "AZ", "DBACKS", "D BACKS", "DIAMONDBACKS"),
    ("ATLANTA BRAVES", "ATL", "BRAVES"),
    ("BALTIMORE ORIOLES", "BAL", "ORIOLES", "OS", "O S"),
    ("BOSTON RED SOX", "BOS", "RED SOX", "BOSOX"),
    ("CHICAGO CUBS", "CHC", "CUBS"),
    ("CHICAGO WHITE SOX", "CWS", "CHW", "WHITE SOX", "WHITESOX", "CHISOX"),
    ("CINCINNATI REDS", "CIN", "REDS"),
    ("CLEVELAND GUARDIANS", "CLE", "GUARDIANS", "GUARDS"),
    ("COLORADO ROCKIES", "COL", "ROCKIES", "ROX"),
    ("DETROIT TIGERS", "DET", "TIGERS"),
    ("HOUSTON ASTROS", "HOU", "ASTROS", "STROS"),
    ("KANSAS CITY ROYALS", "KC", "KCR", "ROYALS"),
    ("LOS ANGELES ANGELS", "LAA", "ANGELS", "HALOS", "LA ANGELS", "LOS ANGELES ANGELS OF ANAHEIM"),
    ("LOS ANGELES DODGERS", "LAD", "DODGERS", "LA DODGERS"),
    ("MIAMI MARLINS", "MIA", "MARLINS"),
    ("MILWAUKEE BREWERS", "MIL", "BREWERS", "BREW CREW"),
    ("MINNESOTA TWINS", "MIN", "TWINS"),
    ("NEW YORK METS", "NYM", "METS"),
    ("NEW YORK YANKEES", "NYY", "YANKEES", "YANKS"),
    ("ATHLETICS", "ATH", "OAK", "AS", "A S", "OAKLAND ATHLETICS", "OAKLAND AS"),
    ("PHILADELPHIA PHILLIES", "PHI", "PHILLIES", "PHILS"),
    ("PITTSBURGH PIRATES", "PIT", "PIRATES", "BUCS"),
    ("SAN DIEGO PADRES", "SD", "SDP", "PADRES", "FRIARS"),
    ("SAN FRANCISCO GIANTS", "SF", "SFG", "GIANTS"),
    ("SEATTLE MARINERS", "SEA", "MARINERS", "MS"),
    ("ST LOUIS CARDINALS", "STL", "CARDINALS", "CARDS", "SAINT LOUIS CARDINALS"),
    ("TAMPA BAY RAYS", "TB", "TBR", "RAYS"),
    ("TEXAS RANGERS", "TEX", "RANGERS"),
    ("TORONTO BLUE JAYS", "TOR", "BLUE JAYS", "JAYS"),
    ("WASHINGTON NATIONALS", "WSH", "WSN", "NATIONALS", "NATS"),
)

NBA_SYNONYMS = _table(
    ("ATLANTA HAWKS", "ATL", "HAWKS"),
    ("BOSTON CELTICS", "BOS", "CELTICS"),
    ("BROOKLYN NETS", "BKN", "BRK", "NETS"),
    ("CHARLOTTE HORNETS", "CHA", "CHO", "HORNETS"),
    ("CHICAGO BULLS", "CHI", "BULLS"),
    ("CLEVELAND CAVALIERS", "CLE", "CAVALIERS", "CAVS"),
    ("DALLAS MAVERICKS", "DAL", "MAVERICKS", "MAVS"),
    ("DENVER NUGGETS", "DEN", "NUGGETS"),
    ("DETROIT PISTONS", "DET", "PISTONS"),
    ("GOLDEN STATE WARRIORS", "GSW", "GS", "WARRIORS", "DUBS"),
    ("HOUSTON ROCKETS", "HOU", "ROCKETS"),
    ("INDIANA PACERS", "IND", "PACERS"),
    ("LOS ANGELES CLIPPERS", "LAC", "CLIPPERS", "LA CLIPPERS"),
    ("LOS ANGELES LAKERS", "LAL", "LAKERS", "LA LAKERS"),
    ("MEMPHIS GRIZZLIES", "MEM", "GRIZZLIES", "GRIZZ"),
    ("MIAMI HEAT", "MIA", "HEAT"),
    ("MILWAUKEE BUCKS", "MIL", "BUCKS"),
    ("MINNESOTA TIMBERWOLVES", "MIN", "TIMBERWOLVES", "WOLVES", "TWOLVES", "T WOLVES"),
    ("NEW ORLEANS PELICANS", "NOP", "NO", "PELICANS", "PELS"),
    ("NEW YORK KNICKS", "NYK", "NY", "KNICKS"),
    ("OKLAHOMA CITY THUNDER", "OKC", "THUNDER"),
    ("ORLANDO MAGIC", "ORL", "MAGIC"),
    ("PHILADELPHIA 76ERS", "PHI", "76ERS", "SIXERS"),
    ("PHOENIX SUNS", "PHX", "PHO", "SUNS"),
    ("PORTLAND TRAIL BLAZERS", "POR", "TRAIL BLAZERS", "BLAZERS", "PORTLAND TRAILBLAZERS"),
    ("SACRAMENTO KINGS", "SAC", "KINGS"),
    ("SAN ANTONIO SPURS", "SAS", "SA", "SPURS"),
    ("TORONTO RAPTORS", "TOR", "RAPTORS"),
    ("UTAH JAZZ", "UTA", "UTAH", "JAZZ"),
    ("WASHINGTON WIZARDS", "WAS", "WSH", "WIZARDS"),
)

WNBA_SYNONYMS = _table(
    ("ATLANTA DREAM", "ATL", "DREAM"),
    ("CHICAGO SKY", "CHI", "SKY"),
    ("CONNECTICUT SUN", "CON", "CONN", "SUN"),
    ("DALLAS WINGS", "DAL", "WINGS"),
    ("GOLDEN STATE VALKYRIES", "GS", "GSV", "VALKYRIES"),
    ("INDIANA FEVER", "IND", "FEVER"),
    ("LAS VEGAS ACES", "LV", "LVA", "ACES"),
    ("LOS ANGELES SPARKS", "LA", "LAS", "SPARKS", "LA SPARKS"),
    ("MINNESOTA LYNX", "MIN", "LYNX"),
    ("NEW YORK LIBERTY", "NY", "NYL", "LIBERTY"),
    ("PHOENIX MERCURY", "PHX", "PHO", "MERCURY"),
    ("SEATTLE STORM", "SEA", "STORM"),
    ("WASHINGTON MYSTICS", "WAS", "WSH", "MYSTICS"),
)

NHL_SYNONYMS = _table(
    ("ANAHEIM DUCKS", "ANA", "DUCKS"),
    ("BOSTON BRUINS", "BOS", "BRUINS"),
    ("BUFFALO SABRES", "BUF", "SABRES"),
    ("CALGARY FLAMES", "CGY", "FLAMES"),
    ("CAROLINA HURRICANES", "CAR", "HURRICANES", "CANES"),
    ("CHICAGO BLACKHAWKS", "CHI", "BLACKHAWKS", "HAWKS"),
    ("COLORADO AVALANCHE", "COL", "AVALANCHE", "AVS"),
    ("COLUMBUS BLUE JACKETS", "CBJ", "BLUE JACKETS", "JACKETS"),
    ("DALLAS STARS", "DAL", "STARS"),
    ("DETROIT RED WINGS", "DET", "RED WINGS", "WINGS"),
    ("EDMONTON OILERS", "EDM", "OILERS"),
    ("FLORIDA PANTHERS", "FLA", "PANTHERS", "CATS"),
    ("LOS ANGELES KINGS", "LAK", "LA", "KINGS", "LA KINGS"),
    ("MINNESOTA WILD", "MIN", "WILD"),
    ("MONTREAL CANADIENS", "MTL", "CANADIENS", "HABS"),
    ("NASHVILLE PREDATORS", "NSH", "PREDATORS", "PREDS"),
    ("NEW JERSEY DEVILS", "NJD", "NJ", "DEVILS"),
    ("NEW YORK ISLANDERS", "NYI", "ISLANDERS", "ISLES"),
    ("NEW YORK RANGERS", "NYR", "RANGERS"),
    ("OTTAWA SENATORS", "OTT", "SENATORS", "SENS"),
    ("PHILADELPHIA FLYERS", "PHI", "FLYERS"),
    ("PITTSBURGH PENGUINS", "PIT", "PENGUINS", "PENS"),
    ("SAN JOSE SHARKS", "SJS", "SJ", "SHARKS"),
    ("SEATTLE KRAKEN", "SEA", "KRAKEN"),
    ("ST LOUIS BLUES", "STL", "BLUES", "SAINT LOUIS BLUES"),
    ("TAMPA BAY LIGHTNING", "TBL", "TB", "LIGHTNING", "BOLTS"),
    ("TORONTO MAPLE LEAFS", "TOR", "MAPLE LEAFS", "LEAFS"),
    ("UTAH MAMMOTH", "UTA", "UTAH", "MAMMOTH", "UTAH HOCKEY CLUB", "UTAH HC"),
    ("VANCOUVER CANUCKS", "VAN", "CANUCKS", "NUCKS"),
    ("VEGAS GOLDEN KNIGHTS", "VGK", "VEG", "GOLDEN KNIGHTS", "KNIGHTS"),
    ("WASHINGTON CAPITALS", "WSH", "WAS", "CAPITALS", "CAPS"),
    ("WINNIPEG JETS", "WPG", "JETS"),
)

NFL_SYNONYMS = _table(
    ("ARIZONA CARDINALS", "ARI", "CARDINALS", "CARDS"),
    ("ATLANTA FALCONS", "ATL", "FALCONS"),
    ("BALTIMORE RAVENS", "BAL", "RAVENS"),
    ("BUFFALO BILLS", "BUF", "BILLS"),
    ("CAROLINA PANTHERS", "CAR", "PANTHERS"),
    ("CHICAGO BEARS", "CHI", "BEARS"),
    ("CINCINNATI BENGALS", "CIN", "BENGALS"),
    ("CLEVELAND BROWNS", "CLE", "BROWNS"),
    ("DALLAS COWBOYS", "DAL", "COWBOYS"),
    ("DENVER BRONCOS", "DEN", "BRONCOS"),
    ("DETROIT LIONS", "DET", "LIONS"),
    ("GREEN BAY PACKERS", "GB", "GNB", "PACKERS"),
    ("HOUSTON TEXANS", "HOU", "TEXANS"),
    ("INDIANAPOLIS COLTS", "IND", "COLTS"),
    ("JACKSONVILLE JAGUARS", "JAX", "JAC", "JAGUARS", "JAGS"),
    ("KANSAS CITY CHIEFS", "KC", "KAN", "CHIEFS"),
    ("LAS VEGAS RAIDERS", "LV", "LVR", "RAIDERS"),
    ("LOS ANGELES CHARGERS", "LAC", "CHARGERS", "LA CHARGERS"),
    ("LOS ANGELES RAMS", "LAR", "LA", "RAMS", "LA RAMS"),
    ("MIAMI DOLPHINS", "MIA", "DOLPHINS", "FINS"),
    ("MINNESOTA VIKINGS", "MIN", "VIKINGS", "VIKES"),
    ("NEW ENGLAND PATRIOTS", "NE", "NWE", "PATRIOTS", "PATS"),
    ("NEW ORLEANS SAINTS", "NO", "NOR", "SAINTS"),
    ("NEW YORK GIANTS", "NYG", "GIANTS"),
    ("NEW YORK JETS", "NYJ", "JETS"),
    ("PHILADELPHIA EAGLES", "PHI", "EAGLES"),
    ("PITTSBURGH STEELERS", "PIT", "STEELERS"),
    ("SAN FRANCISCO 49ERS", "SF", "SFO", "49ERS", "NINERS"),
    ("SEATTLE SEAHAWKS", "SEA", "SEAHAWKS"),
    ("TAMPA BAY BUCCANEERS", "TB", "TAM", "BUCCANEERS", "BUCS"),
    ("TENNESSEE TITANS", "TEN", "TITANS"),
    ("WASHINGTON COMMANDERS", "WAS", "WSH", "COMMANDERS"),
)

# EPL and MLS share one table; kept conservative.
SOCCER_SYNONYMS = _table(
    ("MANCHESTER CITY", "MAN CITY", "MCFC"),
    ("MANCHESTER UNITED", "MAN U", "MAN UNITED", "MAN UTD", "MANCHESTER UTD", "MUFC"),
    ("TOTTENHAM HOTSPUR", "SPURS", "TOTTENHAM"),
    ("ARSENAL", "GUNNERS", "ARSENAL FC"),
    ("WEST HAM UNITED", "HAMMERS", "WEST HAM"),
    ("NEWCASTLE UNITED", "TOON", "NEWCASTLE", "MAGPIES"),
    ("WOLVERHAMPTON WANDERERS", "WOLVES", "WOLVERHAMPTON"),
    ("BRIGHTON AND HOVE ALBION", "BRIGHTON", "BRIGHTON HOVE ALBION", "SEAGULLS"),
    ("NOTTINGHAM FOREST", "NOTTM FOREST", "NOTTINGHAM", "FOREST"),
    ("LEICESTER CITY", "LEICESTER", "FOXES"),
    ("IPSWICH TOWN", "IPSWICH"),
    ("CRYSTAL PALACE", "PALACE"),
    ("ASTON VILLA", "VILLA"),
    ("AFC BOURNEMOUTH", "BOURNEMOUTH", "CHERRIES"),
    ("LEEDS UNITED", "LEEDS"),
    ("SHEFFIELD UNITED", "SHEFFIELD UTD"),
    ("LUTON TOWN", "LUTON"),
    ("BURNLEY", "BURNLEY FC"),
    ("SUNDERLAND", "SUNDERLAND AFC"),
    # MLS
    ("LOS ANGELES FC", "LAFC"),
    ("LA GALAXY", "GALAXY", "LOS ANGELES GALAXY"),
    ("NEW YORK RED BULLS", "RED BULLS", "NY RED BULLS"),
    ("NEW YORK CITY FC", "NYCFC", "NYC FC", "NEW YORK CITY"),
    ("INTER MIAMI CF", "INTER MIAMI"),
    ("AUSTIN FC", "AUSTIN"),
    ("CHARLOTTE FC", "CHARLOTTE"),
    ("SEATTLE SOUNDERS FC", "SOUNDERS", "SEATTLE SOUNDERS"),
    ("PORTLAND TIMBERS", "TIMBERS", "PORTLAND"),
    ("VANCOUVER WHITECAPS FC", "WHITECAPS", "VANCOUVER WHITECAPS", "VANCOUVER"),
    ("ATLANTA UNITED FC", "ATLANTA UNITED", "ATLANTA UTD"),
    ("SPORTING KANSAS CITY", "SPORTING KC", "SKC"),
    ("ST LOUIS CITY SC", "ST LOUIS CITY", "STL CITY"),
)

SYNONYM_TABLES = MappingProxyType({
    "MLB": MLB_SYNONYMS,
    "NBA": NBA_SYNONYMS,
    "WNBA": WNBA_SYNONYMS,
    "NHL": NHL_SYNONYMS,
    "NFL": NFL_SYNONYMS,
    "EPL": SOCCER_SYNONYMS,
    "MLS": SOCCER_SYNONYMS,
})
