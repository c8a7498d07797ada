from types import MappingProxyType

# Target triples whose name differs from the one autotools' --host expects.
TRIPLE_TRANSLATIONS = MappingProxyType({
    "armv7-unknown-linux-gnueabihf": "arm-linux-gnueabihf",
})


def translate(identifier: str) -> str:
    """Return the autotools host triple for a target triple.

    Triples without an entry are passed through unchanged.
    """
    return TRIPLE_TRANSLATIONS.get(identifier, identifier)


def resolve_cross_target(host: str, target: str) -> str | None:
    """Return the ``--host`` value for configure, or None on a native build."""
    if host == target:
        return None
    return translate(target)
