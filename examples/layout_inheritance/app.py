"""Layout inheritance -- a three-level extends chain.

``post.html`` extends ``blog.html`` extends ``base.html``. Only the base
layout writes the document; every level can override a block and pull in
the version it replaces with ``render_block_parent()``.

Run:
    python app.py
"""

from lineage import DictLoader, Environment, TemplateDefinition


def base_body(t, p):
    t.write("<html><head><title>")
    t.render_block("title", p)
    t.write("</title></head><body>")
    t.include("nav.html", {"links": p["links"]})
    t.write("<main>")
    t.render_block("content", p)
    t.write("</main></body></html>")


def blog_title(t, p):
    t.write("Blog | ")
    t.render_block_parent("title", p)


def post_title(t, p):
    t.write(p["post"]["title"])
    t.write(" | ")
    t.render_block_parent("title", p)


def post_content(t, p):
    t.write(f"<article>{p['post']['body']}</article>")


def nav_body(t, p):
    t.write("<nav>")
    for label in p["links"]:
        t.write(f"<a>{label}</a>")
    t.write("</nav>")


templates = {
    "base.html": TemplateDefinition(
        body=base_body,
        blocks={
            "title": lambda t, p: t.write(p["site"]),
            "content": lambda t, p: None,
        },
    ),
    "blog.html": TemplateDefinition(parent="base.html", blocks={"title": blog_title}),
    "post.html": TemplateDefinition(
        parent="blog.html",
        blocks={"title": post_title, "content": post_content},
    ),
    "nav.html": TemplateDefinition(body=nav_body),
}

env = Environment(loader=DictLoader(templates), globals={"site": "Example Site"})

output = env.render(
    "post.html",
    {
        "post": {"title": "Hello", "body": "First post."},
        "links": ["Home", "Archive"],
    },
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
