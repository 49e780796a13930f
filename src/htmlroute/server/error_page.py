"""Self-contained HTML error page.

Plain f-string rendering with inline CSS, so an error response never
depends on files under the root directory.
"""

import html

_STYLE = """\
body {
  font-family: Arial, sans-serif;
  text-align: center;
  margin-top: 100px;
  color: #333;
}
h1 {
  font-size: 48px;
  color: #e74c3c;
  margin-bottom: 20px;
}
p {
  font-size: 18px;
  margin-bottom: 30px;
}"""


def render_error_page(status: int, message: str) -> str:
    """Render a minimal HTML document showing *status* and *message*.

    The message is HTML-escaped; it may echo a file reference.
    """
    safe = html.escape(message)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="UTF-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"<title>Error {status}</title>\n"
        f"<style>\n{_STYLE}\n</style>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{status}</h1>\n"
        f"<p>{safe}</p>\n"
        "</body>\n"
        "</html>\n"
    )
