"""Posts in the writing category."""

CATEGORY = "writing"

frontmatter = {
    "title": "Page 1",
    "type": "select",
    "selectedTerms": [CATEGORY],
    "taxonomyName": "categories",
}


def Page(props):
    items = "".join(f"<li>{page['frontmatter'].get('title', '')}</li>" for page in props["pages"])
    return f"<h1>{props['frontmatter']['title']}</h1><ul>{items}</ul>"
