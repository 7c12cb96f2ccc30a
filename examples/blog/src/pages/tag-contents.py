"""One listing per tag, at /tag/<slug>/."""

frontmatter = {
    "type": "taxonomy",
    "taxonomyName": "tags",
    "title": "Tag: ${term}",
    "permalink": "/tag/${term}/",
}


def Page(props):
    items = "".join(
        f'<li><a href="{page["route"]}">{page["frontmatter"].get("title", "")}</a></li>'
        for page in props["pages"]
    )
    return f"<h1>{props['frontmatter']['title']}</h1><ul>{items}</ul>"
