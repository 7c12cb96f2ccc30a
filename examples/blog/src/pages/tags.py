"""Index of every tag."""

frontmatter = {
    "type": "terms",
    "title": "Tags",
    "taxonomyName": "tags",
}


def Page(props):
    items = "".join(
        f'<li><a href="/tag/{link["slug"]}/">{link["term"]}</a></li>' for link in props["terms"]
    )
    return f"<h1>{props['frontmatter']['title']}</h1><ul>{items}</ul>"
