"""Unit tests for extraction strategies."""

import unittest

import lxml.html

from leto.errors import InvalidPathError, NoContentFoundError, PathNotFoundError
from leto.parsers.article import LargestArticleSubsection
from leto.parsers.base import clean_text, inner_text, join_sections
from leto.parsers.xpath import PathSelect


def parse(markup: str):
    return lxml.html.document_fromstring(markup)


class TestTextHelpers(unittest.TestCase):
    def test_clean_text(self):
        self.assertEqual(clean_text("  Hello \t  World  "), "Hello World")
        self.assertEqual(clean_text("a\n\n\n\nb"), "a\n\nb")
        self.assertEqual(clean_text("\n  \n"), "")

    def test_inner_text_inline_and_blocks(self):
        doc = parse("<html><body><div><p>Hello <b>World</b>!</p><p>Again</p></div></body></html>")
        self.assertEqual(inner_text(doc.find(".//div")), "Hello World!\n\nAgain")

    def test_inner_text_skips_scripts_and_comments(self):
        doc = parse(
            "<html><body><div>Visible<script>var hidden = 1;</script> text"
            "<!-- note --><style>p {}</style></div></body></html>"
        )
        self.assertEqual(inner_text(doc.find(".//div")), "Visible text")

    def test_inner_text_decodes_entities(self):
        doc = parse("<html><body><p>Tom &amp; Jerry&#33;</p></body></html>")
        self.assertEqual(inner_text(doc.find(".//p")), "Tom & Jerry!")

    def test_join_sections(self):
        self.assertEqual(join_sections(["one", "two"]), "one\n\ntwo")


class TestLargestArticleSubsection(unittest.TestCase):
    def test_picks_largest_article(self):
        long_text = "x" * 500
        short_text = "y" * 50
        doc = parse(
            f"<html><body><article>{short_text}</article>"
            f"<article>{long_text}</article></body></html>"
        )
        self.assertEqual(LargestArticleSubsection().extract(doc), long_text)

    def test_tie_goes_to_first_in_document_order(self):
        doc = parse(
            "<html><body><article>first one</article>"
            "<article>other one</article></body></html>"
        )
        self.assertEqual(LargestArticleSubsection().extract(doc), "first one")

    def test_falls_back_to_main_and_section(self):
        doc = parse(
            "<html><body><nav>Menu</nav><section>short</section>"
            "<main>The main content of the page</main></body></html>"
        )
        self.assertEqual(
            LargestArticleSubsection().extract(doc), "The main content of the page"
        )

    def test_picks_largest_div_on_div_only_pages(self):
        long_text = "x" * 500
        short_text = "y" * 50
        doc = parse(
            f"<html><body><div>{short_text}</div>"
            f"<div>{long_text}</div></body></html>"
        )
        self.assertEqual(LargestArticleSubsection().extract(doc), long_text)

    def test_wrapper_div_does_not_win(self):
        doc = parse(
            "<html><body><div id='page'>"
            "<div class='nav'><a href='/'>Home</a> <a href='/about'>About</a></div>"
            "<div class='content'><p>First paragraph of the story.</p>"
            "<p>Second paragraph of the story.</p></div>"
            "<div class='footer'>Copyright</div>"
            "</div></body></html>"
        )
        self.assertEqual(
            LargestArticleSubsection().extract(doc),
            "First paragraph of the story.\n\nSecond paragraph of the story.",
        )

    def test_empty_articles_fall_through_to_body(self):
        doc = parse(
            "<html><body><article> </article><p>Only body text</p></body></html>"
        )
        self.assertEqual(LargestArticleSubsection().extract(doc), "Only body text")

    def test_no_text_raises(self):
        doc = parse("<html><body><script>var a = 1;</script></body></html>")
        with self.assertRaises(NoContentFoundError):
            LargestArticleSubsection().extract(doc)


class TestPathSelect(unittest.TestCase):
    DOC = (
        "<html><body>"
        "<p class='x'>one</p>"
        "<div><p class='x'>two</p></div>"
        "<p class='x'>three <em>and more</em></p>"
        "<p class='y'>other</p>"
        "</body></html>"
    )

    def test_first_match_wins(self):
        doc = parse(self.DOC)
        strategy = PathSelect("//p[@class='x']")
        self.assertEqual(strategy.extract(doc), "one")
        # Repeated calls on the same document are stable
        self.assertEqual(strategy.extract(doc), "one")

    def test_select_all_joins_sections_in_document_order(self):
        doc = parse(self.DOC)
        text = PathSelect("//p[@class='x']", select_all=True).extract(doc)
        self.assertEqual(text, "one\n\ntwo\n\nthree and more")
        self.assertEqual(text.split("\n\n"), ["one", "two", "three and more"])

    def test_zero_matches(self):
        doc = parse(self.DOC)
        for select_all in (False, True):
            with self.subTest(select_all=select_all):
                with self.assertRaises(PathNotFoundError):
                    PathSelect("//article", select_all).extract(doc)

    def test_invalid_path(self):
        doc = parse(self.DOC)
        for path in ("//p[", "", "count(//p)"):
            with self.subTest(path=path):
                with self.assertRaises(InvalidPathError):
                    PathSelect(path).extract(doc)

    def test_text_node_results(self):
        doc = parse(self.DOC)
        self.assertEqual(PathSelect("//p[@class='y']/text()").extract(doc), "other")


if __name__ == "__main__":
    unittest.main()
