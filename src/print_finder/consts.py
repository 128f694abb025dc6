"""Constants shared by the source adapters and the API layer."""

MAX_RESULTS_PER_SOURCE = 15

PRINTABLES_API_URL = "https://api.printables.com/graphql"
PRINTABLES_MODEL_URL = "https://www.printables.com/model/{id}-{slug}"
PRINTABLES_IMAGE_SIZE = 256

THINGIVERSE_API_URL = "https://api.thingiverse.com/search"

MAKERWORLD_BASE_URL = "https://makerworld.com"
MAKERWORLD_SEARCH_URL = "https://makerworld.com/de/search"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

PRINTABLES_SEARCH_QUERY = """
query FileSearch($query: String!, $limit: Int!) {
    search(input: { term: $query, scope: MODEL, limit: $limit }) {
        ... on ModelSearch {
            total
            hits {
                ... on ModelHit {
                    score
                    object {
                        id
                        name
                        primaryImage { url }
                        user { name }
                        slug
                    }
                }
            }
        }
    }
}
"""

# Makerworld markup selectors. These track the live site and break when it is redesigned.
MAKERWORLD_CARD_SELECTOR = ".card-item-hover-box.model-item"
MAKERWORLD_TITLE_SELECTOR = ".model-title a"
MAKERWORLD_IMAGE_SELECTOR = ".image-box .img-box img"
MAKERWORLD_AUTHOR_SELECTOR = ".author-name a"
MAKERWORLD_IMAGE_ATTR = "data-src"

# API response messages
MISSING_TERM_MESSAGE = "Search term (q) is missing or blank."
INTERNAL_ERROR_MESSAGE = "An internal error occurred."

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

API_VERSION = "1.0.0"
