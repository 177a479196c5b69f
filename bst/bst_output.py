import html
import re

_BINDING_RE = re.compile(r"^[A-Za-z_]\w*\s*=")


def format_output_html(message: str) -> str:
    """Colour transcript lines the way the output pane shows them."""
    rows = []
    for line in message.split("\n"):
        text = html.escape(line) or "&nbsp;"
        if line.startswith("?-"):
            style = "color:#3498db; font-weight:bold; margin-top:10px;"
        elif line.startswith("Error:") or line == "false.":
            style = "color:#e74c3c;"
        elif line.startswith("true."):
            style = "color:#27ae60; font-weight:bold;"
        elif _BINDING_RE.match(line):
            style = "color:#f39c12;"
        else:
            style = "color:#95a5a6;"
        rows.append(f"<div style='{style}'>{text}</div>")
    return "".join(rows)
