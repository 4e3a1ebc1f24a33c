"""Terminal front end for the content wizard.

Usage:
    content-wizard run [output.html]   # Walk through the wizard interactively
    content-wizard help                # Show this message
"""

from __future__ import annotations

import os
import sys

from dotenv import load_dotenv

from content_wizard.config import Provider, WizardConfig, load_config
from content_wizard.errors import ContentWizardError, ValidationError
from content_wizard.llm_client import build_model_call
from content_wizard.models import ContentType, NodeKind, Session, Step
from content_wizard.seo import analyze_seo_metrics, calculate_seo_score
from content_wizard.step_machine import StepMachine
from content_wizard.storage import SupabaseContentRepository, ensure_can_create, save_session


def setup_environment() -> WizardConfig:
    """Load .env and check the API key for the configured provider."""
    # Load .env from the project root
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    load_dotenv(os.path.join(project_root, ".env"))

    config = load_config()
    key_names = (
        ("LLM_API_KEY", "DEEPSEEK_API_KEY")
        if config.provider == Provider.OPENAI
        else ("ANTHROPIC_API_KEY",)
    )
    key = next((os.environ[name] for name in key_names if os.environ.get(name)), None)
    if not key:
        print(f"❌ Missing {' or '.join(key_names)} in .env file")
        sys.exit(1)

    print(f"🔧 Provider: {config.provider.value}  Model: {config.model or 'default'}")
    print(f"🔑 API Key: ...{key[-4:]}")
    return config


def _log(source: str, message: str) -> None:
    print(f"   ⏳ [{source}] {message}")


# ── Rendering ─────────────────────────────────────────────────────────


def print_outline(session: Session) -> None:
    for i, node in enumerate(session.outline):
        indent = "" if node.kind == NodeKind.H1 else "  "
        print(f"{indent}{i:>2}. [{node.kind.value.upper()}] {node.text}")
        for item in node.children:
            print(f"{indent}      - {item}")


def print_choices(session: Session, step: Step) -> None:
    if step == Step.TITLE and session.title_suggestions:
        print("\n💡 Suggested titles:")
        for i, title in enumerate(session.title_suggestions, 1):
            print(f"   {i}. {title}")
    elif step == Step.LSI and session.lsi_keywords:
        print("\n💡 Suggested keywords:")
        for i, keyword in enumerate(session.lsi_keywords, 1):
            print(f"   {i}. {keyword}")
    elif step == Step.OUTLINE:
        print("\n🗂  Outline:")
        print_outline(session)


def resolve_choice(raw: str, options: list[str]) -> str:
    """Turn ``"1, 3"`` into the matching options; other entries pass through."""
    picked = []
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit() and 1 <= int(part) <= len(options):
            picked.append(options[int(part) - 1])
        elif part:
            picked.append(part)
    return ", ".join(picked)


def choose_content_type() -> ContentType:
    types = list(ContentType)
    print("\nWhat type of content would you like to create?")
    for i, content_type in enumerate(types, 1):
        print(f"   {i}. {content_type.value}")
    while True:
        raw = input("> ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(types):
            return types[int(raw) - 1]
        try:
            return ContentType(raw)
        except ValueError:
            print("❌ Please choose a number from the list")


# ── Commands ──────────────────────────────────────────────────────────


def run_wizard(machine: StepMachine, output_path: str | None = None) -> Session:
    """Drive ``machine`` from the first step to the content step."""
    machine.select_content_type(choose_content_type())

    while True:
        session = machine.session
        step = session.current_step
        prompt = machine.get_prompt()
        if step == Step.CONTENT and session.content:
            break

        print(f"\n── {step.value} ──")
        if session.last_error:
            print(f"⚠️  {session.last_error}")
        print(prompt.text)
        for example in prompt.examples:
            print(f"   {example}")
        print_choices(session, step)

        raw = input("> ")
        if step == Step.TITLE:
            raw = resolve_choice(raw, session.title_suggestions) if raw.strip().isdigit() else raw
        elif step == Step.LSI:
            raw = resolve_choice(raw, session.lsi_keywords)
        elif step == Step.OUTLINE and not raw.strip():
            raw = "ok"

        try:
            machine.process_input(step, raw)
        except ValidationError as e:
            print(f"❌ {e.reason}")
        except ContentWizardError as e:
            print(f"❌ {e}")

    session = machine.snapshot()
    print("\n✅ Draft ready")
    print(f"   Title: {session.title}")
    print(f"   Meta description: {session.meta_description}")

    keywords = session.selected_keywords or session.keywords
    if keywords:
        try:
            metrics = analyze_seo_metrics(session.content, keywords, title=session.title,
                                          meta_description=session.meta_description)
        except ContentWizardError as e:
            print(f"⚠️  SEO analysis skipped: {e}")
        else:
            score = calculate_seo_score(metrics)
            print(f"\n📊 SEO score: {score.total}/100")
            for bucket, points in score.breakdown.model_dump().items():
                print(f"   {bucket:<12} {points}/20")
            print(f"   {metrics.word_count} words, {metrics.reading_time} min read")

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(session.content)
        print(f"\n💾 Saved draft to {output_path}")
    return session


def save_to_backend(session: Session) -> None:
    """Persist the draft when a backend and a user are configured."""
    user_id = os.environ.get("CONTENT_WIZARD_USER_ID")
    if not os.environ.get("SUPABASE_URL") or not user_id:
        return
    repository = SupabaseContentRepository.from_env()
    try:
        ensure_can_create(repository, user_id, os.environ.get("CONTENT_WIZARD_PLAN", "free"))
        record = save_session(repository, session, user_id)
    except ContentWizardError as e:
        print(f"❌ {e}")
        return
    print(f"☁️  Saved to your library as {record.id}")


def run(output_path: str | None = None):
    """Run the interactive wizard."""
    config = setup_environment()

    print("\n🚀 Starting Content Wizard...")
    print("=" * 60)

    machine = StepMachine(build_model_call(config), config, on_log=_log)
    try:
        session = run_wizard(machine, output_path)
    except (KeyboardInterrupt, EOFError):
        print("\n👋 Bye")
        return
    save_to_backend(session)


def main():
    """CLI entry point."""
    args = sys.argv[1:] if len(sys.argv) > 1 else ["run"]
    command = args[0].lower()

    if command == "run":
        run(args[1] if len(args) > 1 else None)
    elif command == "help":
        print(__doc__)
    else:
        print(f"Unknown command: {command}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
