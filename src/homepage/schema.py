"""Canonical shape and default values of the homepage configuration.

The canonical key sets below are the single source of truth for which
section toggles, editable titles and item-count limits exist.  Stored
documents written by older releases may have fewer or more keys; they are
reconciled against these defaults by ``insights.homepage.merge``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

LIMIT_MIN = 0
LIMIT_MAX = 50

DEFAULT_SECTIONS: dict[str, bool] = {
    "hero": True,
    "latestPosts": True,
    "featuredStories": True,
    "latestNews": True,
    "ourMethodology": True,
    "ourPodcast": True,
    "listen": True,
    "ourHomeTours": True,
    "featuredArticles": True,
    "newsletter": True,
}

DEFAULT_TITLES: dict[str, str] = {
    "latestPosts": "Latest Post",
    "featuredStories": "Featured Stories",
    "ourMethodology": "Our Methodology",
    "ourPodcast": "Latest Podcast",
    "listen": "Listen",
    "ourHomeTours": "Watch",
    "featuredArticles": "Featured Articles",
}

DEFAULT_LIMITS: dict[str, int] = {
    "latestPosts": 3,
    "featuredStories": 6,
    "reels": 4,
    "newLaunches": 4,
    "webinars": 4,
    "homeTours": 4,
}

SECTION_KEYS = tuple(DEFAULT_SECTIONS)
TITLE_KEYS = tuple(DEFAULT_TITLES)
LIMIT_KEYS = tuple(DEFAULT_LIMITS)


class MethodologyItem(BaseModel):
    """One card of the "Our Methodology" strip."""

    id: str
    title: str = ""
    description: str = ""
    thumbnail: str = ""
    slug: str = ""


class PodcastBlock(BaseModel):
    """The single featured podcast episode."""

    label: str = ""
    title: str = ""
    description: str = ""
    thumbnail: str = ""
    slug: str = ""


class Nugget(BaseModel):
    """One short podcast clip in the "Listen" strip."""

    id: str
    title: str = ""
    description: str = ""
    avatar: str = ""
    slug: str = ""


class HomepageConfig(BaseModel):
    """Fully-populated homepage configuration handed to consumers."""

    sections: dict[str, bool] = Field(default_factory=lambda: dict(DEFAULT_SECTIONS))
    titles: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TITLES))
    limits: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_LIMITS))
    methodology: list[MethodologyItem] = Field(
        default_factory=lambda: [m.model_copy() for m in DEFAULT_METHODOLOGY]
    )
    podcast: PodcastBlock = Field(default_factory=lambda: DEFAULT_PODCAST.model_copy())
    nuggets: list[Nugget] = Field(
        default_factory=lambda: [n.model_copy() for n in DEFAULT_NUGGETS]
    )

    def to_document(self) -> dict[str, object]:
        """Return the JSON-ready document stored by the content store."""
        return self.model_dump(mode="json")


DEFAULT_METHODOLOGY: list[MethodologyItem] = [
    MethodologyItem(
        id="1",
        title="PLB Signature Home Tour Videos: Why Home Tours Are Important In Selling Properties",
        description=(
            "Discover the wonders of Singapore with SkyLiving! Our platform seamlessly "
            "integrates with all major VR devices, allowing you to embark on exciting "
            "virtual tours of the city's most stunning condos and luxurious locations."
        ),
        thumbnail="https://images.unsplash.com/photo-1524813686514-a57563d77965?w=800&q=80",
        slug="plb-signature-home-tour-videos",
    ),
    MethodologyItem(
        id="2",
        title="Selling Homes the Right Way: PropertyLimBrothers' Game-Changing Home Tour Videos",
        description=(
            "Experience the vibrant essence of Singapore through SkyLiving! Our service "
            "is designed to work with all leading VR devices, offering you engaging "
            "virtual tours of the city's most iconic condos and upscale properties."
        ),
        thumbnail="https://images.unsplash.com/photo-1486406146926-c627a92ad1ab?w=800&q=80",
        slug="selling-homes-the-right-way",
    ),
    MethodologyItem(
        id="3",
        title=(
            "PLB Signature Home Tour Videos: Why Home Tours Can Sell Homes Better & "
            "Faster For Sellers"
        ),
        description=(
            "Step into the future of real estate with SkyLiving! Fully compatible with "
            "all top VR devices, our platform invites you to explore Singapore's most "
            "remarkable condos and luxury properties through immersive virtual tours."
        ),
        thumbnail="https://images.unsplash.com/photo-1449157291145-7efd050a4d0e?w=800&q=80",
        slug="plb-home-tours-sell-faster",
    ),
]

DEFAULT_PODCAST = PodcastBlock(
    label="Latest Podcast",
    title=(
        "Who Really Controls Property Valuations? And How to Spot Undervalued Units "
        "Today | NOTG S3 Ep 121"
    ),
    description=(
        "Property valuations: who decides? In this episode of NOTG, Alfred, Jesley, "
        "and Yu Rong from PropertyLimBrothers break down the real story behind "
        "property valuations and why they often don't match what you see on paper."
    ),
    thumbnail="/images/homepage/our-podcasts.webp",
    slug="notg-s3-ep121-property-valuations",
)

DEFAULT_NUGGETS: list[Nugget] = [
    Nugget(
        id="1",
        title="Resale vs. New Launch: Navigating the 2025–2028 Shift | NOTG S4 Ep31...",
        description="Exploring the life of a digital nomad and the places they visit.",
        avatar="/images/homepage/george-peng.webp",
        slug="resale-vs-new-launch-notg-s4-ep31",
    ),
    Nugget(
        id="2",
        title=(
            "From Budgeting to Design: Expert Advice on Building Your Dream Home "
            "| NOTG S4 Ep 29..."
        ),
        description="Discover the culinary delights and fascinating tales from various cultures.",
        avatar="/images/homepage/ong-yurong.webp",
        slug="budgeting-to-design-notg-s4-ep29",
    ),
    Nugget(
        id="3",
        title="The 3-Investor Strategy Behind High-Yield Property Returns | NOTG S4 Ep22...",
        description="Savor the flavors and stories from different corners of the globe.",
        avatar="/images/homepage/ong-yurong.webp",
        slug="3-investor-strategy-notg-s4-ep22",
    ),
    Nugget(
        id="4",
        title="Freehold Underdogs and Exit Quantum: What Investors Miss | NOTG S4 Ep28...",
        description=(
            "Dive into the adventures of a digital nomad and the incredible "
            "destinations the..."
        ),
        avatar="/images/homepage/george-peng.webp",
        slug="freehold-underdogs-notg-s4-ep28",
    ),
    Nugget(
        id="5",
        title="What Does It Take to Grow From HDB to $6.5M in Value? | NOTG S4 Ep21...",
        description="Uncover the journey of a digital nomad and the amazing places they experien...",
        avatar="/images/homepage/george-peng.webp",
        slug="hdb-to-6-5m-notg-s4-ep21",
    ),
    Nugget(
        id="6",
        title="The 6 Steps to Making Smart Property Investments | NOTG S4 Ep25...",
        description="Taste the world through captivating recipes and food narratives.",
        avatar="/images/homepage/ong-yurong.webp",
        slug="6-steps-smart-property-notg-s4-ep25",
    ),
]


def default_config() -> HomepageConfig:
    """Return a fresh copy of the default configuration."""
    return HomepageConfig()
