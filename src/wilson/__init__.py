"""Wilson — content-to-route resolution for file-based static sites.

Scans a directory of page sources carrying frontmatter and derives every
page the site generates: content pages, term-filtered listings, one
listing per taxonomy term, term indexes, all paginated. Edits are applied
incrementally: only the edited source and the listing pages that depend
on its taxonomy terms are regenerated.

Quick start::

    import wilson

    table = wilson.resolve_all("my-site/")
    for entry in table.entries():
        print(entry.route, entry.source_path)

Long-running hosts keep an engine::

    engine = wilson.Engine(wilson.WilsonConfig(root=Path("my-site")))
    engine.resolve_all()
    dependents = engine.on_source_changed(change)
    props = engine.get_route_props(path, {"page": 2})

"""

__version__ = "0.1.0"
__all__ = [
    "Engine",
    "SourceChange",
    "WilsonConfig",
    "__version__",
    "build",
    "dev",
    "resolve_all",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import wilson`` fast; the engine pulls in the parsers.
    """
    if name == "WilsonConfig":
        from wilson.config import WilsonConfig

        return WilsonConfig

    if name in ("Engine", "SourceChange", "resolve_all", "build", "dev"):
        from wilson import engine

        return getattr(engine, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
