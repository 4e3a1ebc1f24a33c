"""User-facing guidance shown for each wizard step."""

from __future__ import annotations

from content_wizard.models import ContentType, Platform, Step, StepPrompt

# ── Default step guidance ─────────────────────────────────────────────

DEFAULT_GUIDANCE: dict[Step, StepPrompt] = {
    Step.PLATFORM: StepPrompt(text="Select the platform for your content:"),
    Step.TOPIC: StepPrompt(
        text="Tell me about your topic:",
        examples=[
            "Example: Digital marketing trends for small businesses",
            "Example: Sustainable living tips for urban dwellers",
            "Example: Beginner's guide to cryptocurrency investing",
        ],
    ),
    Step.BUSINESS_NAME: StepPrompt(
        text="What is the name of your business?",
        examples=["Example: Lone Star Plumbing", "Example: Brightline Web Studio"],
    ),
    Step.LOCATION_TOGGLE: StepPrompt(
        text="Does this service target specific locations? (yes/no)",
        examples=["Answer yes for local services like plumbing or electricians"],
    ),
    Step.SERVICE_LOCATION: StepPrompt(
        text="Enter primary service area:",
        examples=[
            "Format: City, State (e.g., Austin, TX)",
            "Neighborhoods: Downtown Seattle, WA",
            "Metro area: Phoenix Metro Area",
        ],
    ),
    Step.SERVICE_AREA: StepPrompt(
        text="List the neighborhoods or towns you serve (separated by commas):",
        examples=["Example: Round Rock, Cedar Park, Pflugerville"],
    ),
    Step.EMAIL_COUNT: StepPrompt(
        text="How many emails in this sequence?",
        examples=[
            "Typically 3-7 emails work best",
            "More than 7 may overwhelm recipients",
            "Fewer than 3 might not build enough momentum",
        ],
    ),
    Step.TARGET_AUDIENCE: StepPrompt(
        text="Describe your target audience:",
        examples=[
            "Example: SaaS trial users who didn't convert",
            "Example: E-commerce customers with abandoned carts",
            "Example: Leads who downloaded our whitepaper",
        ],
    ),
    Step.TITLE: StepPrompt(
        text="Choose one of the suggested titles below or enter your own creative title:"
    ),
    Step.KEYWORDS: StepPrompt(
        text="Enter your target keywords (separated by commas):",
        examples=[
            "Example: digital marketing, SEO tips, online visibility",
            "Example: healthy recipes, meal prep, nutrition guide",
            "Tip: Include both broad and specific keywords",
        ],
    ),
    Step.HASHTAGS: StepPrompt(
        text="Enter your hashtags (separated by commas):",
        examples=[
            "Example: #DigitalMarketing, #SmallBusiness, #GrowthTips",
            "Example: #SustainableLiving, #EcoFriendly, #GreenLiving",
            "Tip: Mix trending and niche hashtags",
        ],
    ),
    Step.LSI: StepPrompt(text="Select keywords to optimize your content:"),
    Step.OUTLINE: StepPrompt(
        text="Review and customize your content outline:",
        examples=[
            "Tip: Add, remove, or reorder sections as needed",
            "Tip: Ensure a logical flow between sections",
            "Tip: Include key points you want to cover",
        ],
    ),
    Step.CONTENT: StepPrompt(text="Review your generated content:"),
}

# ── Topic guidance per content type ───────────────────────────────────

TOPIC_GUIDANCE: dict[ContentType, StepPrompt] = {
    ContentType.BLOG_POST: DEFAULT_GUIDANCE[Step.TOPIC],
    ContentType.LANDING_PAGE: StepPrompt(
        text="What is the primary purpose of this landing page?",
        examples=[
            "Example: Convert visitors to trial signups",
            "Example: Promote new product launch",
            "Example: Generate service inquiries",
        ],
    ),
    ContentType.SERVICE_PAGE: StepPrompt(
        text="What service would you like to promote?",
        examples=[
            "Example: Professional web design services",
            "Example: Local plumbing and repair",
            "Example: Business consulting solutions",
        ],
    ),
    ContentType.EMAIL_SEQUENCE: StepPrompt(
        text="What is the goal of this email sequence?",
        examples=[
            "Example: Welcome and onboard new subscribers",
            "Example: Launch a new product or service",
            "Example: Re-engage inactive customers",
        ],
    ),
    ContentType.LISTICLE: StepPrompt(
        text="What topic would you like to create a list about?",
        examples=[
            "Example: Top 10 productivity tools for remote teams",
            "Example: 15 essential tips for first-time homebuyers",
            "Example: 7 effective strategies for social media growth",
        ],
    ),
    ContentType.RESOURCE_GUIDE: StepPrompt(
        text="What topic would you like to create a comprehensive guide for?",
        examples=[
            "Example: Complete guide to starting an online business",
            "Example: Ultimate resource for home gardening",
            "Example: Comprehensive guide to personal finance",
        ],
    ),
}

# ── Platform guidance (topic, plus hashtags for social) ───────────────

PLATFORM_GUIDANCE: dict[Platform, StepPrompt] = {
    Platform.INSTAGRAM: StepPrompt(
        text="What would you like to share on Instagram?",
        examples=[
            "Example: Behind-the-scenes look at our team",
            "Example: Product showcase with lifestyle photos",
            "Example: Quick tips and industry insights",
        ],
    ),
    Platform.TWITTER_X: StepPrompt(
        text="What would you like to tweet about?",
        examples=[
            "Example: Industry news and commentary",
            "Example: Quick tips in a thread format",
            "Example: Engaging question for your audience",
        ],
    ),
    Platform.LINKEDIN: StepPrompt(
        text="What would you like to share on LinkedIn?",
        examples=[
            "Example: Professional achievement or milestone",
            "Example: Industry insights and analysis",
            "Example: Company culture and team highlights",
        ],
    ),
    Platform.FACEBOOK: StepPrompt(
        text="What would you like to post on Facebook?",
        examples=[
            "Example: Company update or announcement",
            "Example: Customer success story",
            "Example: Community engagement post",
        ],
    ),
    Platform.THREADS: StepPrompt(
        text="What would you like to share on Threads?",
        examples=[
            "Example: Industry conversation starter",
            "Example: Quick insights and observations",
            "Example: Engaging with current trends",
        ],
    ),
    Platform.PINTEREST: StepPrompt(
        text="What would you like to pin on Pinterest?",
        examples=[
            "Example: Visual guide or infographic",
            "Example: Inspirational design showcase",
            "Example: Step-by-step tutorial with images",
        ],
    ),
    Platform.YOUTUBE: StepPrompt(
        text="What type of video would you like to create?",
        examples=[
            "Example: In-depth tutorial (10-15 minutes)",
            "Example: Product review and demonstration",
            "Example: Expert interview or discussion",
        ],
    ),
    Platform.TIKTOK: StepPrompt(
        text="What type of TikTok would you like to create?",
        examples=[
            "Example: Quick tip or life hack (30-60 seconds)",
            "Example: Behind-the-scenes glimpse",
            "Example: Trending challenge participation",
        ],
    ),
    Platform.EXPLAINER: StepPrompt(
        text="What would you like to explain in your video?",
        examples=[
            "Example: Product features and benefits",
            "Example: Service process walkthrough",
            "Example: Complex concept simplified",
        ],
    ),
}

HASHTAG_GUIDANCE: dict[Platform, StepPrompt] = {
    Platform.INSTAGRAM: StepPrompt(
        text="Enter your Instagram hashtags (separated by commas):",
        examples=[
            "Example: #InstaMarketing, #BrandGrowth, #InstaBusiness",
            "Mix popular tags like #InstaDaily with niche ones",
            "Tip: Use up to 5 strategic hashtags for better reach",
        ],
    ),
    Platform.TWITTER_X: StepPrompt(
        text="Enter your Twitter hashtags (separated by commas):",
        examples=[
            "Example: #TechNews, #StartupLife, #Innovation",
            "Use trending hashtags relevant to your topic",
            "Tip: 2-3 hashtags work best for Twitter engagement",
        ],
    ),
    Platform.LINKEDIN: StepPrompt(
        text="Enter your LinkedIn hashtags (separated by commas):",
        examples=[
            "Example: #Leadership, #ProfessionalDevelopment, #Innovation",
            "Use industry-specific and professional hashtags",
            "Tip: 3-5 relevant hashtags for professional context",
        ],
    ),
    Platform.FACEBOOK: StepPrompt(
        text="Enter your Facebook hashtags (separated by commas):",
        examples=[
            "Example: #SmallBusiness, #LocalBusiness, #CommunityFirst",
            "Use branded and campaign-specific hashtags",
            "Tip: 2-3 targeted hashtags for better reach",
        ],
    ),
    Platform.THREADS: StepPrompt(
        text="Enter your Threads hashtags (separated by commas):",
        examples=[
            "Example: #TechTalk, #CreatorEconomy, #FutureOfWork",
            "Mix trending and niche conversation hashtags",
            "Tip: 3-4 hashtags to join relevant conversations",
        ],
    ),
}

LISTICLE_GUIDANCE: dict[Step, StepPrompt] = {
    Step.TITLE: StepPrompt(
        text="Choose a title for your listicle:",
        examples=[
            "Example: 10 Essential Tools Every Digital Marketer Needs",
            "Example: 7 Proven Strategies to Boost Your Website Conversion Rate",
            "Example: 15 Time-Saving Hacks for Busy Professionals",
        ],
    ),
    Step.OUTLINE: StepPrompt(
        text="Review and customize your listicle outline:",
        examples=[
            "Tip: Each H2 will be a numbered list item",
            "Tip: Aim for at least 5-10 list items for a comprehensive listicle",
            "Tip: Consider adding a brief introduction and conclusion",
        ],
    ),
}


def get_step_prompt(
    content_type: ContentType | None,
    step: Step,
    platform: Platform | None = None,
) -> StepPrompt:
    """Most specific guidance for ``step``; falls back to the defaults."""
    if step == Step.TOPIC:
        if platform is not None and platform in PLATFORM_GUIDANCE:
            return PLATFORM_GUIDANCE[platform]
        if content_type in TOPIC_GUIDANCE:
            return TOPIC_GUIDANCE[content_type]
    if step == Step.HASHTAGS and platform in HASHTAG_GUIDANCE:
        return HASHTAG_GUIDANCE[platform]
    if content_type == ContentType.LISTICLE and step in LISTICLE_GUIDANCE:
        return LISTICLE_GUIDANCE[step]
    return DEFAULT_GUIDANCE.get(step, StepPrompt())
