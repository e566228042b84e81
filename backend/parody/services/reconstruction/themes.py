"""Theme stylesheets injected into reconstructed pages.

One fixed stylesheet per ``ParodyStyle``, plus the shared notice banner rules
and a few layout-preserving overrides derived from the original page.
"""

from parody.models.content import LayoutInfo
from parody.models.parody import ParodyStyle

THEME_MARKER_ATTR = "data-parody-theme"
NOTICE_MARKER_ATTR = "data-parody-notice"
NOTICE_CLASS = "parody-notice"

# =============================================================================
# Per-style stylesheets
# =============================================================================

THEME_CSS: dict[ParodyStyle, str] = {
    ParodyStyle.CORPORATE_BUZZWORD: """
* { font-family: Arial, Helvetica, sans-serif !important; }
body {
  background: linear-gradient(180deg, #E5E7EB 0%, #F3F4F6 100%) !important;
  color: #374151 !important;
}
h1, h2, h3, h4, h5, h6 {
  color: #1E40AF !important;
  text-transform: uppercase !important;
  font-weight: 700 !important;
  letter-spacing: 1px !important;
}
p::before { content: "\\2022  "; color: #1E40AF; font-weight: bold; }
button, .btn, .button, input[type="submit"] {
  background: #1E40AF !important;
  color: #fff !important;
  border: none !important;
  padding: 12px 24px !important;
  text-transform: uppercase !important;
  font-weight: bold !important;
}
img { filter: contrast(1.2) saturate(0.8) !important; border-radius: 8px !important; }
""",
    ParodyStyle.GEN_Z_BRAINROT: """
* { font-family: Inter, -apple-system, sans-serif !important; }
body {
  background: linear-gradient(45deg, #FF6B6B, #4ECDC4, #45B7D1, #96CEB4, #FFEAA7) !important;
  background-size: 400% 400% !important;
  animation: parody-gradient 15s ease infinite !important;
}
@keyframes parody-gradient {
  0% { background-position: 0% 50%; }
  50% { background-position: 100% 50%; }
  100% { background-position: 0% 50%; }
}
h1, h2, h3 { color: #2D3436 !important; font-weight: 800 !important; }
h1::after, h2::after { content: " \\2728"; }
p {
  background: rgba(255, 255, 255, 0.9) !important;
  border-radius: 15px !important;
  padding: 15px !important;
}
img { border-radius: 20px !important; filter: saturate(1.2) contrast(1.1) !important; }
button, .btn, .button, input[type="submit"] {
  background: linear-gradient(45deg, #FF6B6B, #4ECDC4) !important;
  border: none !important;
  border-radius: 25px !important;
  color: #fff !important;
  font-weight: 600 !important;
}
""",
    ParodyStyle.MEDIEVAL: """
* { font-family: Cinzel, Georgia, serif !important; }
body {
  background: linear-gradient(180deg, #8B4513 0%, #DEB887 50%, #F4E4BC 100%) !important;
  color: #3E2723 !important;
}
h1, h2, h3 {
  color: #8B0000 !important;
  text-align: center !important;
  border-bottom: 3px solid #DAA520 !important;
  padding-bottom: 10px !important;
}
h1::before, h2::before { content: "\\269C  "; color: #DAA520; }
h1::after, h2::after { content: " \\269C"; color: #DAA520; }
p {
  background: rgba(245, 245, 220, 0.9) !important;
  border: 2px solid #DAA520 !important;
  border-radius: 10px !important;
  padding: 15px !important;
}
img { border: 5px solid #DAA520 !important; filter: sepia(0.3) contrast(1.1) !important; }
button, .btn, .button, input[type="submit"] {
  background: linear-gradient(45deg, #DAA520, #B8860B) !important;
  border: 2px solid #8B0000 !important;
  color: #8B0000 !important;
  font-weight: bold !important;
}
""",
    ParodyStyle.INFOMERCIAL: """
* { font-family: Impact, "Arial Black", sans-serif !important; }
body {
  background: repeating-linear-gradient(45deg, #FFF200 0 40px, #FFE100 40px 80px) !important;
  color: #111 !important;
}
h1, h2, h3 {
  color: #E10600 !important;
  text-transform: uppercase !important;
  text-shadow: 3px 3px 0 #FFF, 5px 5px 0 #000 !important;
}
h1::after { content: " *AS SEEN ON TV*"; font-size: 0.5em; color: #0033CC; }
p { font-size: 1.1em !important; font-weight: bold !important; }
img { border: 6px dashed #E10600 !important; transform: rotate(-1deg); }
button, .btn, .button, input[type="submit"] {
  background: #E10600 !important;
  color: #FFF200 !important;
  border: 4px solid #000 !important;
  font-size: 1.2em !important;
  text-transform: uppercase !important;
  animation: parody-pulse 1s ease-in-out infinite !important;
}
@keyframes parody-pulse {
  0%, 100% { transform: scale(1); }
  50% { transform: scale(1.08); }
}
""",
    ParodyStyle.CONSPIRACY: """
* { font-family: "Courier New", monospace !important; }
body {
  background: linear-gradient(180deg, #1a1a1a 0%, #2d2d2d 100%) !important;
  color: #E0E0E0 !important;
}
h1, h2, h3 {
  color: #FF4444 !important;
  text-transform: uppercase !important;
  text-shadow: 0 0 10px rgba(255, 68, 68, 0.5) !important;
  border-left: 5px solid #FF4444 !important;
  padding-left: 15px !important;
}
h1::before { content: "[CLASSIFIED] "; color: #FF4444; }
p {
  background: rgba(0, 0, 0, 0.5) !important;
  border-left: 3px solid #FF4444 !important;
  padding: 10px !important;
}
img { border: 2px solid #FF4444 !important; filter: grayscale(0.5) contrast(1.2) brightness(0.8) !important; }
button, .btn, .button, input[type="submit"] {
  background: rgba(255, 68, 68, 0.2) !important;
  border: 2px solid #FF4444 !important;
  color: #FF4444 !important;
  text-transform: uppercase !important;
}
""",
    ParodyStyle.SIMPSONS: """
* { font-family: Akbar, "Comic Sans MS", cursive !important; }
body {
  background: linear-gradient(135deg, #87CEEB 0%, #FFD90F 50%, #87CEEB 100%) !important;
  background-attachment: fixed;
}
h1, h2, h3, h4, h5, h6 {
  color: #FF6B6B !important;
  text-shadow: 3px 3px 0 #000 !important;
  font-weight: bold !important;
}
a { color: #FF6B6B !important; }
button, .btn, .button, input[type="submit"] {
  background: #FFD90F !important;
  border: 3px solid #000 !important;
  border-radius: 20px !important;
  color: #000 !important;
  font-weight: bold !important;
}
img { border: 5px solid #FFD90F !important; border-radius: 10px !important; }
nav, .nav, .navbar {
  background: rgba(255, 217, 15, 0.9) !important;
  border: 2px solid #000 !important;
  border-radius: 15px !important;
}
""",
}

NOTICE_CSS = """
.parody-notice {
  position: fixed;
  top: 10px;
  right: 10px;
  background: rgba(0, 0, 0, 0.8);
  color: #fff;
  padding: 8px 12px;
  border-radius: 5px;
  font-size: 12px;
  z-index: 2147483647;
  font-family: Arial, sans-serif !important;
}
img { max-width: 100%; height: auto; }
"""

GRID_CSS = """
.grid, [style*="display: grid"], [style*="display:grid"] { display: grid !important; }
"""

FLEX_CSS = """
.flex, [style*="display: flex"], [style*="display:flex"] { display: flex !important; }
"""


def theme_stylesheet(style: ParodyStyle, layout: LayoutInfo | None = None) -> str:
    """Assemble the injected stylesheet for *style*."""
    parts = [f"/* Parody theme: {style.value} */", THEME_CSS[style]]
    if layout is not None:
        if layout.has_grid:
            parts.append(GRID_CSS)
        if layout.has_flexbox:
            parts.append(FLEX_CSS)
    parts.append(NOTICE_CSS)
    return "\n".join(parts)
