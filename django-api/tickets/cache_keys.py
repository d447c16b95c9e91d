"""Cache keys shared by the API views and the invalidation signals."""

PROGRAM_LIST_CACHE_KEY = "programs:list"


def program_cache_key(program_id: str) -> str:
    return f"programs:{program_id}"


def vouchers_cache_key(organization_id: str) -> str:
    return f"organizations:{organization_id}:vouchers"
