from project.exceptions import NotFound

# Largest primary key a BigAutoField can hold
MAX_DB_ID = 2**63 - 1


def resolve_id(value, not_found_message):
    """
    Primary key from a URL segment. Ids outside the database integer range
    cannot name a row, so they are reported as NotFound before any query.
    """
    object_id = int(value)
    if object_id < 1 or object_id > MAX_DB_ID:
        raise NotFound(not_found_message)
    return object_id
