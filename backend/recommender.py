"""Remediation advice derived from a SignalSet.

Every rule is evaluated independently and all applicable rules fire, in a
fixed order. The title and H1 rules are the only ones with an either/or
branch. Content is static per rule apart from a few observed values
(title length, H1 count, word count, link count).
"""

from config import DEFAULT_CONFIG, AnalyzerConfig
from models import Recommendation, SignalSet

META_DESCRIPTION_EXAMPLE = """<meta name="description"
      content="Discover expert SEO tips and
      strategies to boost your website ranking.
      Improve visibility, traffic, and conversions
      with proven techniques.">"""

TITLE_EXAMPLE = "<title>SEO Tips &amp; Strategies | Boost Your Rankings - YourBrand</title>"

H1_EXAMPLE = "<h1>Complete Guide to SEO Optimization in 2025</h1>"

H2_EXAMPLE = """<h2>Why SEO Matters for Your Business</h2>
<p>Content about SEO importance...</p>

<h2>Top SEO Strategies for 2025</h2>
<p>Content about strategies...</p>"""

INTERNAL_LINK_EXAMPLE = """<p>Learn more about <a href="/seo-tips">advanced SEO techniques</a>
to improve your rankings.</p>"""

SCHEMA_EXAMPLE = """<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "Article",
  "headline": "Your Article Title",
  "author": {
    "@type": "Person",
    "name": "Author Name"
  },
  "datePublished": "2025-10-29"
}
</script>"""


class Recommender:
    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._rules = (
            self.meta_description_rule,
            self.title_rule,
            self.h1_rule,
            self.content_length_rule,
            self.h2_rule,
            self.https_rule,
            self.link_count_rule,
            self.schema_rule,
        )

    def recommend(self, signals: SignalSet) -> list[Recommendation]:
        recs = []
        for rule in self._rules:
            rec = rule(signals)
            if rec is not None:
                recs.append(rec)
        return recs

    def meta_description_rule(self, s: SignalSet) -> Recommendation | None:
        if s.meta_description:
            return None
        w = self.config.on_page
        return Recommendation(
            priority="high",
            title="Add Meta Description",
            estimated_time_range="10-15 min",
            description=(
                "Your website is missing a meta description, which is crucial for search engine "
                'results. A well-crafted meta description acts as a "sales pitch" in search results, '
                "directly impacting your click-through rate (CTR). Search engines like Google display "
                "this 150-160 character snippet below your page title, making it one of the first "
                "things potential visitors see."
            ),
            impact_statements=(
                "Increases click-through rates by 5-15%",
                "Improves search result appearance",
                "Helps search engines understand page content",
                "Influences social media shares",
            ),
            remediation_steps=(
                "Open your HTML file or CMS settings",
                "Locate the <head> section",
                "Add the meta description tag",
                "Write compelling 150-160 character description",
                "Include primary keywords naturally",
            ),
            example_markup=META_DESCRIPTION_EXAMPLE,
            best_practices=(
                "Keep it between 150-160 characters (optimal length)",
                "Include your primary keyword near the beginning",
                "Write for humans, not just search engines",
                "Make it unique for each page",
                "Include a call-to-action when appropriate",
                "Avoid duplicate descriptions across pages",
            ),
            potential_points=w.meta_description + w.meta_description_length,
        )

    def title_rule(self, s: SignalSet) -> Recommendation | None:
        w = self.config.on_page
        t = self.config.thresholds
        if not s.title:
            return Recommendation(
                priority="high",
                title="Add Title Tag",
                estimated_time_range="5-10 min",
                description=(
                    "Your page is missing a title tag, which is one of the most important on-page "
                    "SEO elements. The title tag appears in search engine results, browser tabs, and "
                    "social media shares. Without it, search engines cannot properly index your page, "
                    "and users won't understand what your page is about before clicking."
                ),
                impact_statements=(
                    "Critical for search engine ranking",
                    "First impression in search results",
                    "Improves click-through rate by 20-30%",
                    "Required for social media sharing",
                ),
                remediation_steps=(
                    "Open your HTML file",
                    "Find the <head> section",
                    "Add a <title> tag",
                    "Write a descriptive 50-60 character title",
                    "Include your primary keyword",
                ),
                example_markup=TITLE_EXAMPLE,
                best_practices=(
                    "Keep between 50-60 characters for optimal display",
                    "Put important keywords first",
                    "Include your brand name at the end",
                    "Make each page title unique",
                    "Avoid keyword stuffing",
                    "Write compelling, clickable titles",
                ),
                potential_points=w.title + w.title_length,
            )
        if s.title_length < t.title_length_min:
            return Recommendation(
                priority="medium",
                title="Expand Title Tag Length",
                estimated_time_range="5 min",
                description=(
                    f"Your title tag is only {s.title_length} characters, which is too short to be "
                    f"effective. Search engines display up to {t.title_length_max} characters in search "
                    "results, and you're not utilizing this valuable space. A longer, more descriptive "
                    "title can significantly improve your click-through rate and provide better context "
                    "to both users and search engines."
                ),
                impact_statements=(
                    "Better use of SERP real estate",
                    "Improved keyword targeting",
                    "Higher click-through rates",
                    "More descriptive for users",
                ),
                remediation_steps=(
                    f'Review your current title: "{s.title}"',
                    "Add descriptive keywords",
                    "Expand to 50-60 characters",
                    "Test the appearance in Google SERP simulator",
                ),
                best_practices=(
                    "Aim for 50-60 characters total",
                    "Include primary and secondary keywords",
                    "Make it compelling and clickable",
                    "Add your brand name if space allows",
                ),
                potential_points=w.title_length,
            )
        return None

    def h1_rule(self, s: SignalSet) -> Recommendation | None:
        if s.h1_count == 0:
            return Recommendation(
                priority="high",
                title="Add H1 Heading Tag",
                estimated_time_range="5 min",
                description=(
                    "Your page is missing an H1 tag, which is essential for proper page structure and "
                    "SEO. The H1 tag tells both users and search engines what the main topic of your "
                    "page is. Without it, search engines have difficulty understanding your content "
                    "hierarchy, which can negatively impact your rankings."
                ),
                impact_statements=(
                    "Improves content structure",
                    "Helps search engines understand page topic",
                    "Better accessibility for screen readers",
                    "Increases relevance for target keywords",
                ),
                remediation_steps=(
                    "Identify the main heading on your page",
                    "Wrap it in an <h1> tag",
                    "Ensure it includes your primary keyword",
                    "Use only ONE H1 per page",
                ),
                example_markup=H1_EXAMPLE,
                best_practices=(
                    "Use only one H1 tag per page",
                    "Include your primary keyword",
                    "Make it descriptive and compelling",
                    "Keep it between 20-70 characters",
                    "Place it prominently near the top of the page",
                ),
                potential_points=self.config.on_page.h1 + self.config.technical.single_h1,
            )
        if s.h1_count > 1:
            return Recommendation(
                priority="medium",
                title="Use Only One H1 Tag",
                estimated_time_range="10 min",
                description=(
                    f"Your page has {s.h1_count} H1 tags, but SEO best practices recommend using only "
                    "one H1 per page. Multiple H1 tags confuse search engines about which heading is "
                    "the main topic of your page. This dilutes the SEO value and can harm your "
                    "rankings. Convert additional H1 tags to H2 or H3 tags to maintain proper content "
                    "hierarchy."
                ),
                impact_statements=(
                    "Clearer content hierarchy",
                    "Better search engine understanding",
                    "Improved page structure",
                    "Stronger focus on main keyword",
                ),
                remediation_steps=(
                    "Identify all H1 tags on your page",
                    "Choose the most important one as your main H1",
                    "Convert others to H2 or H3 tags",
                    "Verify the hierarchy makes sense",
                ),
                best_practices=(
                    "Always use exactly one H1 per page",
                    "Use H2 for major sections",
                    "Use H3 for subsections",
                    "Maintain logical hierarchy (H1 → H2 → H3)",
                    "Don't skip heading levels",
                ),
                potential_points=self.config.technical.single_h1,
            )
        return None

    def content_length_rule(self, s: SignalSet) -> Recommendation | None:
        t = self.config.thresholds
        if s.word_count >= t.word_count_min:
            return None
        return Recommendation(
            priority="medium",
            title="Increase Content Length",
            estimated_time_range="30-60 min",
            description=(
                f"Your page currently has only {s.word_count} words, which is significantly below "
                f"the recommended minimum of {t.word_count_optimal}-1000 words for good SEO "
                "performance. Longer, comprehensive content tends to rank better in search results "
                "because it provides more value to users and more opportunities to target relevant "
                "keywords naturally."
            ),
            impact_statements=(
                "Better search rankings",
                "More keyword opportunities",
                "Higher user engagement",
                "Increased authority",
            ),
            remediation_steps=(
                "Research your topic thoroughly",
                "Add detailed explanations and examples",
                "Include relevant statistics and data",
                "Add FAQ sections",
                "Expand on key points",
            ),
            best_practices=(
                f"Aim for at least {t.word_count_optimal}-1000 words",
                "Focus on quality over quantity",
                "Break content into scannable sections",
                "Use bullet points and lists",
                "Add relevant images and media",
                "Answer user questions thoroughly",
            ),
            potential_points=self.config.content.word_count_min + self.config.technical.word_count,
        )

    def h2_rule(self, s: SignalSet) -> Recommendation | None:
        if s.h2_count > 0:
            return None
        return Recommendation(
            priority="low",
            title="Add H2 Subheadings",
            estimated_time_range="15-20 min",
            description=(
                "Your page lacks H2 subheadings, which are important for organizing content and "
                "improving readability. Subheadings break up long text, make content scannable, and "
                "help search engines understand your content structure. They also provide additional "
                "opportunities to include relevant keywords naturally."
            ),
            impact_statements=(
                "Better content organization",
                "Improved readability",
                "Enhanced user experience",
                "Additional keyword opportunities",
            ),
            remediation_steps=(
                "Identify major sections in your content",
                "Add descriptive H2 tags for each section",
                "Include relevant keywords where appropriate",
            ),
            example_markup=H2_EXAMPLE,
            best_practices=(
                "Use H2 for major sections",
                "Make headings descriptive",
                "Include keywords naturally",
                "Keep headings concise",
                "Maintain logical flow",
            ),
            potential_points=self.config.content.h2,
        )

    def https_rule(self, s: SignalSet) -> Recommendation | None:
        if s.is_https:
            return None
        return Recommendation(
            priority="high",
            title="Enable HTTPS Security",
            estimated_time_range="30-60 min",
            description=(
                "Your website is not using HTTPS, which means the connection is not secure. HTTPS is "
                'a confirmed Google ranking factor, and modern browsers display "Not Secure" warnings '
                "for HTTP sites. This damages user trust, reduces conversions, and negatively impacts "
                "your search rankings. Enabling HTTPS is essential for any modern website."
            ),
            impact_statements=(
                "Improved security and user trust",
                "Better search engine rankings",
                "Required for modern web features",
                "Increased conversion rates",
            ),
            remediation_steps=(
                "Purchase or obtain a free SSL certificate (Let's Encrypt)",
                "Install the SSL certificate on your server",
                "Update all internal links to HTTPS",
                "Set up 301 redirects from HTTP to HTTPS",
                "Update your sitemap and robots.txt",
            ),
            best_practices=(
                "Use free Let's Encrypt certificates",
                "Enable HSTS (HTTP Strict Transport Security)",
                "Update all internal links",
                "Check for mixed content warnings",
                "Monitor certificate expiration",
            ),
            potential_points=self.config.technical.https,
        )

    def link_count_rule(self, s: SignalSet) -> Recommendation | None:
        if s.total_links >= self.config.thresholds.link_count_min:
            return None
        return Recommendation(
            priority="low",
            title="Add More Internal Links",
            estimated_time_range="15-20 min",
            description=(
                f"Your page has only {s.total_links} links. Internal linking is crucial for SEO as it "
                "helps search engines discover and index your content, distributes page authority, "
                "and improves user navigation. A well-structured internal linking strategy keeps "
                "users on your site longer and helps search engines understand your site's "
                "information architecture."
            ),
            impact_statements=(
                "Better site structure",
                "Improved crawlability",
                "Enhanced user navigation",
                "Distributed page authority",
            ),
            remediation_steps=(
                "Identify related pages on your site",
                "Add contextual links within content",
                "Use descriptive anchor text",
            ),
            example_markup=INTERNAL_LINK_EXAMPLE,
            best_practices=(
                "Use descriptive anchor text",
                "Link to relevant pages only",
                "Aim for 3-5 internal links per page",
                "Avoid over-optimization",
                "Link to both new and important pages",
            ),
            potential_points=self.config.links.link_count,
        )

    def schema_rule(self, s: SignalSet) -> Recommendation | None:
        if s.has_schema:
            return None
        return Recommendation(
            priority="low",
            title="Add Schema Markup",
            estimated_time_range="20-30 min",
            description=(
                "Schema markup (structured data) helps search engines better understand your content "
                "and can result in rich snippets in search results. Rich snippets can include "
                "ratings, prices, availability, and other information that makes your listing stand "
                "out, potentially increasing click-through rates by 20-30%."
            ),
            impact_statements=(
                "Rich snippets in search results",
                "Enhanced SERP appearance",
                "Better search engine understanding",
                "Increased click-through rates",
            ),
            remediation_steps=(
                "Identify appropriate schema type (Article, Product, etc.)",
                "Use Google's Structured Data Markup Helper",
                "Add JSON-LD script to your page",
                "Test with Google's Rich Results Test",
            ),
            example_markup=SCHEMA_EXAMPLE,
            best_practices=(
                "Use JSON-LD format (Google recommended)",
                "Choose the most specific schema type",
                "Test with Google's validation tools",
                "Keep markup up to date",
                "Include all required properties",
            ),
        )


def recommend(signals: SignalSet, config: AnalyzerConfig = DEFAULT_CONFIG) -> list[Recommendation]:
    return Recommender(config).recommend(signals)
