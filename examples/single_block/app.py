"""Single-block rendering -- return one block instead of the whole page.

Useful for partial page updates: the same template renders as a full
document or as just its ``content`` block, resolved through the extends
chain exactly as in a full render.

Run:
    python app.py
"""

from lineage import DictLoader, Environment, TemplateDefinition


def layout_body(t, p):
    t.write("<html><body><header>Shop</header>")
    t.render_block("content", p)
    t.write("</body></html>")


def cart_content(t, p):
    t.write('<ul id="cart">')
    for item in p["items"]:
        t.write(f"<li>{item}</li>")
    t.write("</ul>")


templates = {
    "layout.html": TemplateDefinition(
        body=layout_body,
        blocks={"content": lambda t, p: t.write("<p>Empty</p>")},
    ),
    "cart.html": TemplateDefinition(parent="layout.html", blocks={"content": cart_content}),
}

env = Environment(loader=DictLoader(templates))
params = {"items": ["Tea", "Milk"]}

full_page = env.render("cart.html", params)
fragment = env.render("cart.html", params, block="content")


def main() -> None:
    print(full_page)
    print(fragment)


if __name__ == "__main__":
    main()
