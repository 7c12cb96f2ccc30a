"""Paginated listing of the blog category."""

frontmatter = {
    "type": "select",
    "title": "Blog Posts",
    "selectedTerms": ["blog"],
    "taxonomyName": "categories",
}


def Page(props):
    items = "".join(
        f'<li><a href="{page["route"]}">{page["frontmatter"].get("title", "")}</a></li>'
        for page in props["pages"]
    )
    pagination = props["pagination"]
    links = ""
    if pagination["previousPage"]:
        links += f'<a href="{pagination["previousPage"]}">Previous</a>'
    if pagination["nextPage"]:
        links += f'<a href="{pagination["nextPage"]}">Next</a>'
    return f"<h1>{props['frontmatter']['title']}</h1><ul>{items}</ul>{links}"
