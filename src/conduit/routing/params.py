"""Path parameter converters.

Built-in converters for pattern segments like ``{id:int}``. Captured
values stay strings in ``RouteMatch.path_params``; ``RouteMatch.item_id``
does the int conversion.
"""

# Segment regex for each supported converter (matched with fullmatch)
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"[0-9]+",
}
