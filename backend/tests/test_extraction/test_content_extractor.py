"""Tests for parody.services.extraction.content_extractor."""

from parody.services.extraction import ContentExtractor, extract_content


class TestExtractContent:
    def test_title_and_h1s(self):
        content = extract_content("<title>X</title><h1>A</h1><h1>B</h1>")
        assert content.title == "X"
        assert content.headings.h1 == ["A", "B"]

    def test_title_falls_back_to_first_h1(self):
        content = extract_content("<body><h1> Welcome </h1><h1>Other</h1></body>")
        assert content.title == "Welcome"

    def test_title_default(self):
        assert extract_content("<p>no headings</p>").title == "Untitled"

    def test_svg_title_ignored(self):
        html = "<body><svg><title>icon</title></svg><h1>Real</h1></body>"
        assert extract_content(html).title == "Real"

    def test_headings_keep_order_and_empty_strings(self):
        html = "<h2>one</h2><h3>x</h3><h2>  </h2><h2>three</h2>"
        content = extract_content(html)
        assert content.headings.h2 == ["one", "", "three"]
        assert content.headings.h3 == ["x"]

    def test_paragraphs_unfiltered(self):
        html = "<p>First paragraph</p><p></p><p>ok</p>"
        assert extract_content(html).paragraphs == ["First paragraph", "", "ok"]

    def test_navigation_from_nav_and_header(self):
        html = """
        <header><a href="/">Home</a></header>
        <nav><a href="/about">About</a><a>Nowhere</a></nav>
        <footer><a href="/legal">Legal</a></footer>
        """
        nav = extract_content(html).navigation
        assert [(n.text, n.href) for n in nav] == [
            ("Home", "/"),
            ("About", "/about"),
            ("Nowhere", None),
        ]

    def test_nested_nav_link_listed_once(self):
        html = '<header><nav class="navbar"><a href="/x">X</a></nav></header>'
        assert len(extract_content(html).navigation) == 1

    def test_buttons_use_value_for_submit_inputs(self):
        html = """
        <button>Buy now</button>
        <a class="btn">Learn more</a>
        <input type="submit" value="Send">
        """
        assert extract_content(html).buttons == ["Buy now", "Learn more", "Send"]

    def test_images_in_document_order(self):
        html = '<img src="/a.png" alt="A"><div><img src="/b.png"></div>'
        images = extract_content(html).images
        assert [(i.src, i.alt) for i in images] == [("/a.png", "A"), ("/b.png", None)]

    def test_malformed_html_does_not_raise(self):
        content = ContentExtractor().extract("<html><p>unclosed <b>bold<h1>head")
        assert "head" in content.headings.h1[0]

    def test_empty_input(self):
        content = extract_content("")
        assert content.title == "Untitled"
        assert content.paragraphs == []
