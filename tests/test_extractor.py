import unittest

from config import DEFAULT_CONFIG
from extractor import Extractor, count_words, is_internal_link

PAGE_URL = "https://example.com/blog/post"

SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>  Practical Guide to Sourdough Baking  </title>
  <meta name="description" content="Learn sourdough baking step by step.">
  <meta name="keywords" content="sourdough, bread">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta property="og:title" content="Sourdough Guide">
  <meta property="og:description" content="Bake better bread">
  <meta property="og:image" content="https://example.com/og.png">
  <link rel="canonical" href="/blog/post">
  <script type="application/ld+json">{"@context": "https://schema.org", "@type": "Article"}</script>
  <script type="application/ld+json">{not valid json</script>
  <style>.hidden { display: none; }</style>
</head>
<body>
  <h1>Sourdough Basics</h1>
  <h2>Starter</h2>
  <h2>Dough</h2>
  <h3>Shaping</h3>
  <p>Sourdough bread needs a starter. The starter feeds on flour and water.</p>
  <p>Bread rises slowly; sourdough bread rewards patience.</p>
  <img src="/img/loaf.jpg" alt="A loaf">
  <img src="/img/crumb.jpg" alt="">
  <img src="/img/starter.jpg">
  <a href="/recipes">Recipes</a>
  <a href="#comments">Comments</a>
  <a href="https://example.com/about">About</a>
  <a href="https://other.org/flour">Flour shop</a>
  <a href="mailto:baker@example.com">Email</a>
  <script>var sourdough = "should not be counted";</script>
</body>
</html>
"""


class TestHelpers(unittest.TestCase):
    def test_count_words_ignores_whitespace_runs(self):
        self.assertEqual(count_words("  one\ttwo\n\nthree   "), 3)
        self.assertEqual(count_words(""), 0)
        self.assertEqual(count_words("   "), 0)

    def test_same_host_is_internal(self):
        self.assertTrue(is_internal_link("https://example.com/x", PAGE_URL))

    def test_relative_and_fragment_are_internal(self):
        self.assertTrue(is_internal_link("/about", PAGE_URL))
        self.assertTrue(is_internal_link("#top", PAGE_URL))

    def test_other_host_is_external(self):
        self.assertFalse(is_internal_link("https://other.org/", PAGE_URL))
        self.assertFalse(is_internal_link("mailto:someone@example.com", PAGE_URL))

    def test_unparseable_href_falls_back_to_prefix_check(self):
        self.assertFalse(is_internal_link("http://[broken", PAGE_URL))
        self.assertTrue(is_internal_link("/[broken", PAGE_URL))

    def test_protocol_relative_href_is_decided_by_host(self):
        self.assertFalse(is_internal_link("//other.org/x", PAGE_URL))
        self.assertFalse(is_internal_link("//cdn.other.org/lib.js", "https://example.com/"))
        self.assertTrue(is_internal_link("//example.com/x", PAGE_URL))


class TestExtractor(unittest.TestCase):
    def setUp(self):
        self.extractor = Extractor(DEFAULT_CONFIG)
        self.signals = self.extractor.extract(SAMPLE_HTML, PAGE_URL, load_time_ms=321)

    def test_identity(self):
        s = self.signals
        self.assertEqual(s.url, PAGE_URL)
        self.assertEqual(s.load_time_ms, 321)
        self.assertIsNotNone(s.timestamp)

    def test_title_is_trimmed_but_length_is_raw(self):
        self.assertEqual(self.signals.title, "Practical Guide to Sourdough Baking")
        self.assertEqual(self.signals.title_length, len("  Practical Guide to Sourdough Baking  "))

    def test_meta_and_social(self):
        s = self.signals
        self.assertEqual(s.meta_description, "Learn sourdough baking step by step.")
        self.assertEqual(s.meta_description_length, len(s.meta_description))
        self.assertEqual(s.meta_keywords, "sourdough, bread")
        self.assertEqual(s.og_title, "Sourdough Guide")
        self.assertEqual(s.og_description, "Bake better bread")
        self.assertEqual(s.og_image, "https://example.com/og.png")

    def test_headings(self):
        s = self.signals
        self.assertEqual(s.h1, ("Sourdough Basics",))
        self.assertEqual(s.h2, ("Starter", "Dough"))
        self.assertEqual(s.h3, ("Shaping",))
        self.assertEqual((s.h1_count, s.h2_count, s.h3_count), (1, 2, 1))

    def test_images(self):
        s = self.signals
        self.assertEqual(s.image_count, 3)
        self.assertEqual(s.images_with_alt, 1)
        self.assertEqual(s.images_without_alt, 2)
        self.assertEqual(s.images_with_alt + s.images_without_alt, s.image_count)
        self.assertEqual(s.images[0].src, "https://example.com/img/loaf.jpg")
        self.assertTrue(s.images[0].has_alt)
        self.assertFalse(s.images[1].has_alt)

    def test_links(self):
        s = self.signals
        self.assertEqual(s.total_links, 5)
        self.assertEqual(s.internal_links, 3)
        self.assertEqual(s.external_links, 2)
        self.assertEqual(s.internal_links + s.external_links, s.total_links)
        self.assertEqual(s.links[0].href, "https://example.com/recipes")
        self.assertEqual(s.links[0].text, "Recipes")
        self.assertTrue(s.links[1].is_internal)
        self.assertFalse(s.links[3].is_internal)

    def test_scripts_and_styles_are_not_body_text(self):
        self.assertNotIn("should not be counted", self.signals.body_text)
        self.assertNotIn("display", self.signals.body_text)
        self.assertEqual(self.signals.word_count, len(self.signals.body_text.split()))
        self.assertEqual(self.signals.paragraphs, 2)

    def test_technical(self):
        s = self.signals
        self.assertEqual(s.canonical, "https://example.com/blog/post")
        self.assertEqual(s.viewport, "width=device-width, initial-scale=1")
        self.assertEqual(s.charset, "utf-8")
        self.assertEqual(s.language, "en")
        self.assertTrue(s.is_https)

    def test_malformed_structured_data_is_skipped(self):
        self.assertEqual(len(self.signals.schemas), 1)
        self.assertEqual(self.signals.schemas[0]["@type"], "Article")
        self.assertTrue(self.signals.has_schema)

    def test_keywords(self):
        s = self.signals
        self.assertEqual(s.keywords[0].word, "sourdough")
        # ties with "starter" and "bread"; seen first
        self.assertEqual(s.keywords[0].count, 3)
        self.assertEqual(s.top_keywords[0], ("sourdough", 3))
        self.assertLessEqual(len(s.top_keywords), DEFAULT_CONFIG.top_keyword_limit)

    def test_protocol_relative_links_to_other_hosts_are_external(self):
        markup = '<body><a href="//other.org/x">out</a><a href="//example.com/y">in</a></body>'
        s = self.extractor.extract(markup, PAGE_URL)
        self.assertEqual(s.internal_links, 1)
        self.assertEqual(s.external_links, 1)
        self.assertEqual(s.links[0].href, "https://other.org/x")
        self.assertFalse(s.links[0].is_internal)

    def test_http_page_is_not_https(self):
        signals = self.extractor.extract(SAMPLE_HTML, "http://example.com/")
        self.assertFalse(signals.is_https)

    def test_empty_markup_degrades_to_defaults(self):
        s = self.extractor.extract("", "https://example.com")
        self.assertEqual(s.title, "")
        self.assertEqual(s.title_length, 0)
        self.assertEqual(s.meta_description, "")
        self.assertEqual(s.h1_count, 0)
        self.assertEqual(s.image_count, 0)
        self.assertEqual(s.total_links, 0)
        self.assertEqual(s.word_count, 0)
        self.assertEqual(s.viewport, "")
        self.assertFalse(s.has_schema)
        self.assertEqual(s.keywords, ())

    def test_signal_set_is_immutable(self):
        with self.assertRaises(Exception):
            self.signals.title = "changed"

    def test_structured_data_is_read_only_but_dumps_as_json(self):
        markup = (
            '<script type="application/ld+json">'
            '{"@type": "Product", "offers": [{"price": "9.99"}]}'
            "</script>"
        )
        s = self.extractor.extract(markup, PAGE_URL)
        schema = s.schemas[0]
        with self.assertRaises(TypeError):
            schema["@type"] = "Thing"
        with self.assertRaises(TypeError):
            schema["offers"][0]["price"] = "0"
        self.assertEqual(schema["offers"][0]["price"], "9.99")

        dumped = s.model_dump(mode="json")["schemas"]
        self.assertEqual(dumped, [{"@type": "Product", "offers": [{"price": "9.99"}]}])


class TestKeywords(unittest.TestCase):
    def setUp(self):
        self.extractor = Extractor()

    def test_stop_words_and_short_tokens_are_dropped(self):
        keywords = self.extractor.extract_keywords("The cat and the dog were at an ox farm with the cat")
        words = [k.word for k in keywords]
        self.assertEqual(words, ["cat", "dog", "farm"])
        for word in words:
            self.assertNotIn(word, DEFAULT_CONFIG.stop_words)
            self.assertGreaterEqual(len(word), 3)

    def test_sorted_by_count_with_stable_ties(self):
        keywords = self.extractor.extract_keywords("zebra apple zebra mango apple kiwi zebra")
        self.assertEqual([(k.word, k.count) for k in keywords], [("zebra", 3), ("apple", 2), ("mango", 1), ("kiwi", 1)])
        counts = [k.count for k in keywords]
        self.assertEqual(counts, sorted(counts, reverse=True))

    def test_non_alphabetic_boundaries(self):
        keywords = self.extractor.extract_keywords("SEO2024 rocks; seo-tools, rocks!")
        self.assertEqual([(k.word, k.count) for k in keywords], [("seo", 2), ("rocks", 2), ("tools", 1)])

    def test_density_uses_all_qualifying_tokens(self):
        # five qualifying tokens, "the" included
        keywords = self.extractor.extract_keywords("the apple apple pear plum")
        apple = keywords[0]
        self.assertEqual(apple.word, "apple")
        self.assertEqual(apple.density, 40.0)
        self.assertLessEqual(sum(k.density for k in keywords), 100)

    def test_density_is_rounded_to_two_decimals(self):
        keywords = self.extractor.extract_keywords("alpha beta gamma")
        self.assertEqual(keywords[0].density, 33.33)

    def test_keyword_limit(self):
        text = " ".join(chr(97 + i) * 3 for i in range(26))
        keywords = self.extractor.extract_keywords(text)
        self.assertEqual(len(keywords), DEFAULT_CONFIG.keyword_limit)

    def test_custom_stop_words(self):
        config = DEFAULT_CONFIG.model_copy(update={"stop_words": frozenset({"apple"})})
        keywords = Extractor(config).extract_keywords("apple apple pear")
        self.assertEqual([k.word for k in keywords], ["pear"])

    def test_no_tokens(self):
        self.assertEqual(self.extractor.extract_keywords("12 34 ?!"), [])
