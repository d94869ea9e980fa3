def normalize_name(name: str) -> str:
    """Normalize ability, item and move identifiers to a single lookup key.

    Move data dumps spell identifiers with hyphens ("life-orb", "mold-breaker")
    while hand-written teams use display names ("Life Orb", "Mold Breaker").
    Both collapse to lowercase alphanumerics.

    Args:
        name: The identifier to normalize

    Returns:
        Lowercase identifier with only alphanumeric characters

    Examples:
        >>> normalize_name("life-orb")
        'lifeorb'
        >>> normalize_name("King's Rock")
        'kingsrock'
        >>> normalize_name("Mold Breaker")
        'moldbreaker'
    """
    return "".join(c for c in name.lower() if c.isalnum())


def pretty_name(identifier: str) -> str:
    """Turn a hyphenated data identifier into a display name.

    Examples:
        >>> pretty_name("thunder-punch")
        'Thunder punch'
    """
    if not identifier:
        return identifier
    return identifier[0].upper() + identifier[1:].replace("-", " ")
