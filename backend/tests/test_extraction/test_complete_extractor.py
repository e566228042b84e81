"""Tests for parody.services.extraction.complete_extractor."""

from parody.models.content import ImageContext
from parody.services.extraction import classify_image, extract_complete
from parody.services.extraction.dom import parse_html

PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Acme</title>
  <meta name="description" content="We make anvils">
  <meta name="keywords" content="anvils, rockets , ">
  <meta property="og:title" content="Acme Corp">
  <link rel="canonical" href="https://acme.test/">
  <link href="https://fonts.googleapis.com/css?family=Open+Sans:400|Roboto" rel="stylesheet">
  <style>
    :root { --primary: #ff0000; }
    body { background: #fafafa; color: #222; font-family: 'Lato', sans-serif; }
    .hero-bg { background-image: url('/img/bg.jpg'); }
    .dup { background: url(/img/bg.jpg) no-repeat; }
    .cards { display: grid; }
    @media (max-width: 768px) { .cards { display: block; } }
  </style>
  <script src="https://www.googletagmanager.com/gtag/js?id=G-1"></script>
  <script>gtag('config', 'G-1');</script>
  <script src="/app.js"></script>
</head>
<body>
  <header><img src="/logo.svg" alt="Acme logo"></header>
  <section class="hero"><img src="/team.jpg" alt="Our team"></section>
  <main>
    <img src="photo.jpg" alt="Anvil">
    <img src="/tiny.png" width="32" height="32">
    <div style="background-image: url('/img/inline.png')">inline</div>
    <form action="/signup" method="post">
      <label for="email">Email</label><input id="email" name="email" type="email" required>
      <textarea name="msg" placeholder="Message"></textarea>
    </form>
    <video src="/clip.mp4" poster="/poster.jpg" autoplay></video>
  </main>
</body>
</html>
"""


class TestCompleteExtraction:
    def test_keeps_raw_html(self):
        assert extract_complete(PAGE).full_html == PAGE

    def test_image_contexts(self):
        images = extract_complete(PAGE).images
        contexts = {img.original_src: img.context for img in images}
        assert contexts["/logo.svg"] == ImageContext.LOGO
        assert contexts["/team.jpg"] == ImageContext.HERO
        assert contexts["photo.jpg"] == ImageContext.CONTENT
        assert contexts["/tiny.png"] == ImageContext.ICON
        assert contexts["/img/inline.png"] == ImageContext.BACKGROUND

    def test_stylesheet_backgrounds_deduplicated(self):
        images = extract_complete(PAGE).images
        stylesheet = [img for img in images if img.parent_selector == "style"]
        assert [img.original_src for img in stylesheet] == ["/img/bg.jpg"]
        assert stylesheet[0].is_background

    def test_relative_urls_resolved_against_base(self):
        extraction = extract_complete(PAGE, base_url="https://acme.test/products/")
        by_original = {img.original_src: img.src for img in extraction.images}
        assert by_original["photo.jpg"] == "https://acme.test/products/photo.jpg"
        assert by_original["/logo.svg"] == "https://acme.test/logo.svg"
        assert extraction.videos[0].src == "https://acme.test/clip.mp4"
        assert extraction.videos[0].autoplay

    def test_to_content_skips_backgrounds(self):
        content = extract_complete(PAGE).to_content()
        assert [img.src for img in content.images] == [
            "/logo.svg",
            "/team.jpg",
            "photo.jpg",
            "/tiny.png",
        ]

    def test_seo(self):
        seo = extract_complete(PAGE).seo
        assert seo.title == "Acme"
        assert seo.description == "We make anvils"
        assert seo.keywords == ["anvils", "rockets"]
        assert seo.canonical == "https://acme.test/"
        assert seo.language == "en"
        assert seo.open_graph == {"title": "Acme Corp"}

    def test_styling(self):
        styling = extract_complete(PAGE).styling
        assert styling.color_scheme.primary == "#ff0000"
        assert styling.color_scheme.background == "#fafafa"
        assert styling.color_scheme.text == "#222"
        assert styling.fonts[:1] == ["Lato"]
        assert "Open Sans" in styling.fonts
        assert "Roboto" in styling.fonts

    def test_layout(self):
        layout = extract_complete(PAGE).layout
        assert layout.has_grid
        assert "css-grid" in layout.grid_systems
        assert layout.breakpoints == ["@media (max-width: 768px)"]

    def test_forms(self):
        form = extract_complete(PAGE).forms[0]
        assert form.action == "/signup"
        assert form.method == "POST"
        assert [(f.label, f.type, f.required) for f in form.fields] == [
            ("Email", "email", True),
            ("Message", "textarea", False),
        ]

    def test_scripts_flag_trackers(self):
        scripts = extract_complete(PAGE).scripts
        assert [s.is_tracking for s in scripts] == [True, True, False]

    def test_garbage_input(self):
        extraction = extract_complete("<<<>>>not html")
        assert extraction.title == "Untitled"
        assert extraction.images == []


class TestClassifyImage:
    def _img(self, html: str):
        return parse_html(html).find("img")

    def test_banner_ancestor_is_hero(self):
        tag = self._img('<div id="main-banner"><div><img src="/x.jpg"></div></div>')
        assert classify_image(tag, "/x.jpg") == ImageContext.HERO

    def test_icon_filename(self):
        tag = self._img('<img src="/static/favicon-32.png">')
        assert classify_image(tag, "/static/favicon-32.png") == ImageContext.ICON

    def test_small_declared_size_is_icon(self):
        tag = self._img('<img src="/a.jpg" width="64px">')
        assert classify_image(tag, "/a.jpg") == ImageContext.ICON

    def test_large_image_is_content(self):
        tag = self._img('<img src="/a.jpg" width="800" height="600">')
        assert classify_image(tag, "/a.jpg") == ImageContext.CONTENT

    def test_css_background_without_tag(self):
        assert classify_image(None, "/bg.jpg", is_background=True) == ImageContext.BACKGROUND
