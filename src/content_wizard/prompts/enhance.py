"""Editing prompts: rewrite a passage in place, or generate a block to insert."""

from __future__ import annotations

from enum import Enum


class EnhanceMode(str, Enum):
    IMPROVE_WRITING = "improve-writing"
    ENHANCE_READABILITY = "enhance-readability"
    REPHRASE_CONTENT = "rephrase-content"
    USE_PERSUASIVE = "use-persuasive"
    EXPAND_CONTENT = "expand-content"
    MAKE_CONCISE = "make-concise"
    MAKE_PROFESSIONAL = "make-professional"
    MAKE_CASUAL = "make-casual"


class InsertBlock(str, Enum):
    TABLE = "table"
    FAQ = "faq"
    STATISTICS = "statistics"
    LINKS = "links"
    QUOTE = "quote"
    CTA = "cta"
    PRO_TIP = "pro-tip"
    DESCRIPTION = "description"
    WARNING = "warning"
    KEY_TAKEAWAYS = "key-takeaways"


# ── Enhance ───────────────────────────────────────────────────────────

ENHANCE_INSTRUCTIONS: dict[EnhanceMode, str] = {
    EnhanceMode.IMPROVE_WRITING: "Improve grammar, clarity, and flow while keeping the same meaning.",
    EnhanceMode.ENHANCE_READABILITY: "Make the text easier to read while maintaining key information.",
    EnhanceMode.REPHRASE_CONTENT: "Rephrase to be more engaging while keeping the same meaning.",
    EnhanceMode.USE_PERSUASIVE: "Add persuasive language while maintaining authenticity.",
    EnhanceMode.EXPAND_CONTENT: "Add relevant details while maintaining flow.",
    EnhanceMode.MAKE_CONCISE: "Make more concise while keeping key points.",
    EnhanceMode.MAKE_PROFESSIONAL: "Use more formal, professional language.",
    EnhanceMode.MAKE_CASUAL: "Use more casual, conversational language.",
}

_ENHANCE_SYSTEM = """You are enhancing content while preserving HTML structure.

CRITICAL HTML RULES:
1. You MUST preserve ALL HTML tags exactly as they appear in the input
2. Do not add ANY new HTML tags
3. Do not remove ANY existing HTML tags
4. Do not modify ANY HTML attributes
5. Do not add markdown formatting
6. Do not add citations or references
7. Do not add line breaks between tags
8. Keep the exact same HTML structure

Example input:
<h3>Title</h3><p>Content here.</p>

Example output:
<h3>Enhanced Title</h3><p>Enhanced content here.</p>

Your task: {instruction}"""


def build_enhance_prompt(html: str, mode: EnhanceMode | str) -> tuple[str, str]:
    """Return ``(prompt, system_instruction)`` for rewriting ``html``.

    Raises:
        ValueError: If ``mode`` is not an EnhanceMode value.
    """
    mode = EnhanceMode(mode)
    system = _ENHANCE_SYSTEM.format(instruction=ENHANCE_INSTRUCTIONS[mode])
    prompt = f"Enhance this content while keeping ALL HTML tags exactly as they appear: {html}"
    return prompt, system


# ── Insert ────────────────────────────────────────────────────────────

INSERT_SYSTEM = """You are a content generation assistant specializing in creating high-quality, structured content.
You MUST follow the provided HTML structure EXACTLY as shown in the instructions.
Do not add any classes, styles, or additional HTML elements not specified.
Do not include any CSS or styling.
Do not include any line breaks, <br> tags, or whitespace at the end of the content.
Return only the requested HTML structure.
Do not include any "Buy" links or product recommendations.
Focus on providing valuable, informative content."""

_INSERT_TAIL = """- Use EXACTLY the HTML structure shown above
- Do not add any CSS, styling, or additional HTML
- Do not include any line breaks or <br> tags at the end"""

INSERT_INSTRUCTIONS: dict[InsertBlock, str] = {
    InsertBlock.TABLE: (
        "Create an HTML table with proper headers and rows based on the content. "
        "Format it with clean borders and padding."
    ),
    InsertBlock.FAQ: """Generate a FAQ section following this EXACT HTML structure:

<div class="faq-section">
  <h2>Frequently Asked Questions About [Topic]</h2>
  <div class="faq-items">
    <div class="faq-item">
      <h3>[Question text here?]</h3>
      <p>[Answer text here]</p>
    </div>
  </div>
</div>

Requirements:
- Generate 5-7 questions that begin with What, How, Why, When, Where, or Can
- Each answer should be 2-3 sentences of helpful, informative content
""" + _INSERT_TAIL,
    InsertBlock.STATISTICS: """Create a statistics section following this EXACT HTML structure:

<div class="statistics-section">
  <h2>Key Statistics About [Topic]</h2>
  <div class="stat-grid">
    <div class="stat-item">
      <h3>[Statistic]% [Concise Context/Impact]</h3>
      <p>[One or two sentences explaining the significance and implications]</p>
    </div>
  </div>
</div>

Requirements:
- Each statistic heading combines the number and context (e.g., "75% Energy Savings with LED Bulbs")
- Generate 4-6 impactful statistics with clear context
""" + _INSERT_TAIL,
    InsertBlock.LINKS: """Create a related links section following this EXACT HTML structure:

<div class="related-links">
  <h2>[Topic/Context] Related Links</h2>
  <div class="link-item">
    <p>[Text excerpt or context being referenced]</p>
    <p>[Source Name]:</p>
    <a href="[URL]"><p>[URL]</p></a>
  </div>
</div>

Requirements:
- Generate 3-5 relevant external links that directly relate to the content
- Links must be real, accessible URLs
""" + _INSERT_TAIL,
    InsertBlock.QUOTE: """Create a quote following this EXACT HTML structure:

<blockquote>
  "[Quote text here]"
  <cite><a href="[Source URL]">[Source Name]</a> ([Year])</cite>
</blockquote>

Requirements:
- Quote text must be in quotation marks and no more than 200 characters
- Include the year in parentheses and a real, accessible source URL
""" + _INSERT_TAIL,
    InsertBlock.CTA: """Create a call-to-action section following this EXACT HTML structure:

<div class="cta-section">
  <h3>[Action-oriented heading related to context]</h3>
  <p>[One or two sentences compelling the reader to take action]</p>
  <button>[Clear call-to-action text]</button>
</div>

Requirements:
- Heading should be action-oriented and compelling (4-8 words)
- Button text should be clear and actionable (2-5 words)
""" + _INSERT_TAIL,
    InsertBlock.PRO_TIP: """Create EXACTLY ONE pro tip section following this EXACT HTML structure:

<div class="pro-tip">
  <h3>Pro Tip</h3>
  <p>[Specific, actionable tip related to the context]. [One supporting sentence].</p>
</div>

Requirements:
- Generate EXACTLY ONE pro tip only
- Keep the tip concise (2-3 sentences max)
""" + _INSERT_TAIL,
    InsertBlock.DESCRIPTION: """Create a description box following this EXACT HTML structure:

<div class="description-box">
  <h3>Overview of [Topic/Subject]</h3>
  <p id="summary">[Summary of the content that is easy to understand]</p>
</div>

Requirements:
- Summary should be concise (2-3 sentences max)
""" + _INSERT_TAIL,
    InsertBlock.WARNING: """Create a warning section following this EXACT HTML structure:

<div class="content-warnings">
  <h3>Important Considerations Related to [Topic/Subject]</h3>
  <ul>
    <li>[Key warning or consideration]</li>
  </ul>
</div>

Requirements:
- Include 2-4 concise, relevant warnings as list items
- Keep each warning to one sentence
""" + _INSERT_TAIL,
    InsertBlock.KEY_TAKEAWAYS: """Create a key takeaways section following this EXACT HTML structure:

<div class="key-takeaways">
  <h3>Key Takeaways</h3>
  <ol>
    <li>[Key point from the content]</li>
  </ol>
</div>

Requirements:
- Use an ordered list with 3-5 list items, most important first
- Each takeaway should be clear and concise (one sentence)
""" + _INSERT_TAIL,
}


def build_insert_prompt(block: InsertBlock | str, context: str, title: str = "") -> tuple[str, str]:
    """Return ``(prompt, system_instruction)`` for a block built from ``context``.

    Raises:
        ValueError: If ``block`` is not an InsertBlock value.
    """
    block = InsertBlock(block)
    prompt = f"""Context: {context}
Title: {title}
Type: {block.value}

Instructions:
{INSERT_INSTRUCTIONS[block]}

Generate the content following these instructions exactly."""
    return prompt, INSERT_SYSTEM
