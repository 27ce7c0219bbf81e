"""Demo site: a small shop served straight from its routes folder.

    routes/
      middleware.py           logs every request
      index.ejs               home page with a view counter
      index.middleware.py     counts views through the store plugin
      404.ejs, 500.ejs        not-found and error pages
      [category]/index.ejs    /shoes, /hats ...
      [category]/[id].ejs     /shoes/42
      docs/[...slug].ejs      /docs/anything/below
      static/                 served as-is, cached for a year
      (drafts)/               never routed

Run with ``python app.py`` or ``burrow run -rp examples/site/routes -pp examples/site/plugins``.
"""

from pathlib import Path

from burrow import App, AppConfig

HERE = Path(__file__).parent

app = App(
    AppConfig(
        routes_path=str(HERE / "routes"),
        plugins_path=str(HERE / "plugins"),
    )
)

if __name__ == "__main__":
    app.run()
