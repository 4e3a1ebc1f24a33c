"""The wizard step machine.

One generic machine walks the step sequence declared for the selected content
type. Processing a step applies the user's input, then generates whatever the
next step needs (titles, LSI suggestions, an outline or the draft). The work
happens on a copy of the session that is committed only when every part of the
transition succeeded.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from content_wizard.config import WizardConfig
from content_wizard.content_types import (
    CONTENT_TYPES,
    ContentTypeConfig,
    OutlineFormat,
    parse_platform,
    parse_yes_no,
    split_list,
)
from content_wizard.errors import ContentWizardError, ValidationError
from content_wizard.gateway import GenerationGateway, compact_html
from content_wizard.guidance import get_step_prompt
from content_wizard.models import (
    ContentType,
    EmailSequenceMeta,
    OutlineNode,
    ServicePageMeta,
    Session,
    Step,
    StepPrompt,
    ValidationResult,
)
from content_wizard.outline import build_service_outline, parse_location
from content_wizard.parser import (
    format_hashtags,
    parse_bracket_outline,
    parse_comma_list,
    parse_json_outline,
    parse_numbered_list,
)
from content_wizard.prompts.dispatch import build_step_prompt
from content_wizard.prompts.enhance import (
    EnhanceMode,
    InsertBlock,
    build_enhance_prompt,
    build_insert_prompt,
)
from content_wizard.prompts.keywords import build_keyword_prompt
from content_wizard.seo import derive_meta_description, extract_text

LOGGER = logging.getLogger(__name__)

Subscriber = Callable[[Session], None]

NO_TITLES = "No titles could be extracted from the response. Please try again or enter your own."
NO_KEYWORDS = "No keyword suggestions could be extracted. Please try again or enter your own."
NO_OUTLINE = "The outline could not be generated. Please try again."


def _initial_metadata(content_type: ContentType):
    if content_type == ContentType.SERVICE_PAGE:
        return ServicePageMeta()
    if content_type == ContentType.EMAIL_SEQUENCE:
        return EmailSequenceMeta()
    return None


class StepMachine:
    """Owns one Session and moves it through a content type's steps.

    Args:
        model_call: Transport used to build a gateway when none is given.
        config: Generation settings.
        gateway: A ready GenerationGateway (tests inject one).
        on_log: Optional ``(source, message)`` progress callback.
        today: Fixed date for year-sensitive prompts.
    """

    def __init__(
        self,
        model_call: Callable[..., str] | None = None,
        config: WizardConfig | None = None,
        gateway: GenerationGateway | None = None,
        on_log: callable = None,
        today: date | None = None,
    ):
        self.config = config or WizardConfig()
        if gateway is None:
            if model_call is None:
                raise ValueError("Either model_call or gateway is required")
            gateway = GenerationGateway(model_call, self.config, on_log)
        self.gateway = gateway
        self.today = today
        self.session = Session()
        self._log = on_log or (lambda s, m: None)
        self._subscribers: list[Subscriber] = []

    # ── Observation ──────────────────────────────────────────────────

    def snapshot(self) -> Session:
        """A deep copy of the session; mutating it never affects the machine."""
        return self.session.model_copy(deep=True)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback`` with a snapshot after every state change.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self.snapshot())

    # ── Content type ─────────────────────────────────────────────────

    @property
    def type_config(self) -> ContentTypeConfig:
        if self.session.content_type is None:
            raise ContentWizardError("No content type selected")
        return CONTENT_TYPES[self.session.content_type]

    def select_content_type(self, content_type: ContentType | str) -> Session:
        """Start over with ``content_type``, discarding every previous field."""
        content_type = ContentType(content_type)
        config = CONTENT_TYPES[content_type]
        self.session = Session(
            content_type=content_type,
            current_step=config.first_step,
            metadata=_initial_metadata(content_type),
        )
        LOGGER.info("Selected content type %s", content_type.value)
        self._log("Wizard", f"Starting {content_type.value}")
        self._notify()
        return self.snapshot()

    def active_steps(self) -> list[Step]:
        config = self.type_config
        return [step for step in config.steps if config.is_active(step, self.session)]

    # ── Step contract ────────────────────────────────────────────────

    def get_prompt(self, step: Step | None = None) -> StepPrompt:
        step = step or self.session.current_step
        return get_step_prompt(self.session.content_type, step, self.session.platform)

    def validate_input(self, step: Step, raw: str) -> ValidationResult:
        config = self.type_config
        if step not in config.steps:
            return ValidationResult(
                ok=False, reason=f"{step.value} is not a step of {config.content_type.value}"
            )
        return config.validator(step)(raw, self.session)

    def process_input(self, step: Step | str, raw: str) -> Session:
        """Apply input for the current step and generate what the next one needs.

        Returns:
            A snapshot of the committed session.

        Raises:
            ValidationError: The input failed local validation, or ``step``
                is not the current step. Neither the session nor the model is
                touched.
            GenerationError: The model call failed; the step does not advance.
            ParseError: A JSON outline reply could not be parsed.
        """
        step = Step(step)
        config = self.type_config
        if step != self.session.current_step:
            raise ValidationError(step.value, f"Expected input for {self.session.current_step.value}")

        result = self.validate_input(step, raw)
        if not result.ok:
            raise ValidationError(step.value, result.reason)

        draft = self.session.model_copy(deep=True)
        draft.last_error = None
        self._apply(step, raw, draft)
        next_step = config.next_step(step, draft)
        if next_step is not None:
            self._prepare(next_step, draft)

        if next_step is not None and self._generates(next_step):
            self.session.is_loading = True
            self._notify()
            try:
                self._generate_for(next_step, draft)
            except ContentWizardError as e:
                LOGGER.warning("Step %s failed: %s", step.value, e)
                self.session.last_error = str(e)
                raise
            finally:
                self.session.is_loading = False
                self._notify()

        draft.current_step = next_step or step
        draft.is_loading = False
        self.session = draft
        LOGGER.info("Step %s -> %s", step.value, draft.current_step.value)
        self._notify()
        return self.snapshot()

    # ── Editing outside the step flow ────────────────────────────────

    def update_outline(self, outline: list[OutlineNode]) -> Session:
        """Replace the outline with an edited one (see ``content_wizard.outline``)."""
        self.session.outline = list(outline)
        self._notify()
        return self.snapshot()

    def update_content(self, html: str) -> Session:
        self.session.content = html
        self.session.meta_description = derive_meta_description(html) if html.strip() else ""
        self._notify()
        return self.snapshot()

    def suggest_keywords(self) -> list[str]:
        """Ask the model for starter keywords (hashtags on social types).

        Does not change the current step.
        """
        if not self.session.topic:
            raise ValidationError(Step.TOPIC.value, "Enter a topic before asking for suggestions")
        platform = self.session.platform
        social = self.session.content_type == ContentType.SOCIAL_MEDIA_POST
        limit = self.type_config.selection_limit(platform) if social else 7
        prompt = build_keyword_prompt(self.session.topic, platform, count=limit, today=self.today)
        reply = self._generate_loading(prompt)
        return parse_comma_list(reply, limit=limit, hashtags=social)

    def enhance_content(self, html: str, mode: EnhanceMode | str) -> str:
        """Rewrite a passage of the draft in the given style.

        The HTML tags of ``html`` are kept; the session is not changed, so the
        caller decides where the rewritten passage goes.

        Raises:
            ValidationError: ``html`` has no text.
            ValueError: ``mode`` is not an EnhanceMode value.
        """
        if not html.strip():
            raise ValidationError(Step.CONTENT.value, "Please select some text to enhance")
        prompt, system = build_enhance_prompt(html, mode)
        self._log("Wizard", f"Enhancing content ({EnhanceMode(mode).value})")
        reply = self._generate_loading(
            prompt, system, max_tokens=self.config.enhance_max_tokens, unwrap=False
        )
        return compact_html(reply)

    def insert_block(self, block: InsertBlock | str, context: str | None = None) -> str:
        """Generate an HTML block (FAQ, statistics, CTA...) to insert into the draft.

        Args:
            block: Which kind of block to build.
            context: Selected text to build from; defaults to the whole draft.
        """
        context = (context or "").strip()
        if not context and self.session.content.strip():
            context = extract_text(self.session.content)
        if not context:
            raise ValidationError(Step.CONTENT.value, "There is no content to build the block from")
        prompt, system = build_insert_prompt(block, context, self.session.title)
        self._log("Wizard", f"Inserting {InsertBlock(block).value} block")
        return self._generate_loading(
            prompt, system, max_tokens=self.config.insert_max_tokens, unwrap=False
        )

    def _generate_loading(self, prompt: str, system: str | None = None, **kwargs) -> str:
        self.session.is_loading = True
        self._notify()
        try:
            return self.gateway.generate(prompt, system, **kwargs)
        except ContentWizardError as e:
            self.session.last_error = str(e)
            raise
        finally:
            self.session.is_loading = False
            self._notify()

    # ── Transitions ──────────────────────────────────────────────────

    def _apply(self, step: Step, raw: str, draft: Session) -> None:
        value = raw.strip()
        meta = draft.metadata

        if step == Step.PLATFORM:
            draft.platform = parse_platform(value, self.type_config.platforms)
        elif step == Step.TOPIC:
            draft.topic = value
        elif step == Step.BUSINESS_NAME:
            meta.business_name = value
        elif step == Step.LOCATION_TOGGLE:
            meta.uses_location = bool(parse_yes_no(value))
            if not meta.uses_location:
                meta.location = None
                meta.service_areas = []
        elif step == Step.SERVICE_LOCATION:
            meta.location = parse_location(value)
        elif step == Step.SERVICE_AREA:
            meta.service_areas = split_list(value)
        elif step == Step.EMAIL_COUNT:
            meta.email_count = int(value)
        elif step == Step.TARGET_AUDIENCE:
            meta.target_audience = value
        elif step == Step.TITLE:
            draft.title = value
        elif step == Step.KEYWORDS:
            draft.keywords = split_list(value)
        elif step == Step.HASHTAGS:
            draft.keywords = format_hashtags(split_list(value))
        elif step == Step.LSI:
            selected = split_list(value)
            if draft.content_type == ContentType.SOCIAL_MEDIA_POST:
                selected = format_hashtags(selected)
            draft.selected_keywords = selected[: self.config.max_selected_keywords]
        elif step == Step.CONTENT:
            draft.content = raw
            draft.meta_description = derive_meta_description(raw)
        # Step.OUTLINE: the outline was edited in place, the input only confirms it

    def _generates(self, step: Step) -> bool:
        if step == Step.OUTLINE and self.type_config.outline_format == OutlineFormat.SERVICE_TEMPLATE:
            return False
        return step in (Step.TITLE, Step.LSI, Step.OUTLINE, Step.CONTENT)

    def _generate_for(self, step: Step, draft: Session) -> None:
        config = self.type_config
        prompt, system = build_step_prompt(
            step,
            draft,
            lsi_count=self.config.lsi_keyword_count,
            min_words=self.config.min_content_words if config.long_form else None,
            today=self.today,
        )
        self._log("Wizard", f"Generating {step.value} for {config.content_type.value}")

        if step == Step.TITLE:
            reply = self.gateway.generate(prompt, system)
            draft.title_suggestions = parse_numbered_list(reply)
            if not draft.title_suggestions:
                LOGGER.warning("No titles parsed from reply")
                draft.last_error = NO_TITLES

        elif step == Step.LSI:
            reply = self.gateway.generate(prompt, system)
            social = config.content_type == ContentType.SOCIAL_MEDIA_POST
            draft.lsi_keywords = parse_comma_list(
                reply, limit=self.config.lsi_keyword_count, hashtags=social
            )
            if not draft.lsi_keywords:
                draft.last_error = NO_KEYWORDS

        elif step == Step.OUTLINE:
            reply = self.gateway.generate(prompt, system, max_tokens=self.config.outline_max_tokens)
            if config.outline_format == OutlineFormat.JSON:
                draft.outline = parse_json_outline(reply)
            else:
                draft.outline = parse_bracket_outline(reply)
            if not draft.outline:
                draft.last_error = NO_OUTLINE

        elif step == Step.CONTENT:
            if config.long_form:
                draft.content = self.gateway.generate_long(prompt, system)
            else:
                draft.content = self.gateway.generate(prompt, system)
            draft.meta_description = derive_meta_description(draft.content)

    def _prepare(self, next_step: Step, draft: Session) -> None:
        if next_step == Step.OUTLINE and self.type_config.outline_format == OutlineFormat.SERVICE_TEMPLATE:
            draft.outline = build_service_outline(draft.topic, draft.title, draft.metadata)
