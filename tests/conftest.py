from datetime import date

import pytest

from content_wizard.config import WizardConfig
from content_wizard.gateway import GenerationGateway
from content_wizard.step_machine import StepMachine


class FakeModel:
    """Scripted model transport: returns queued replies, records every call.

    A queued Exception instance is raised instead of returned.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def __call__(self, messages, *, temperature, max_tokens):
        self.calls.append({"messages": [dict(m) for m in messages], "max_tokens": max_tokens})
        if not self.replies:
            raise AssertionError("FakeModel ran out of scripted replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def prompts(self):
        return [call["messages"][-1]["content"] for call in self.calls]


def long_html(words=1300, title="Digital Marketing for Small Businesses"):
    body = " ".join(["marketing"] * words)
    return f"<h1>{title}</h1><h2>Why it matters</h2><p>{body}</p>"


@pytest.fixture
def fake_model():
    return FakeModel()


@pytest.fixture
def config():
    return WizardConfig(min_content_words=1200, content_max_attempts=2)


@pytest.fixture
def gateway(fake_model, config):
    return GenerationGateway(fake_model, config)


@pytest.fixture
def machine(fake_model, config):
    return StepMachine(fake_model, config, today=date(2026, 3, 1))
