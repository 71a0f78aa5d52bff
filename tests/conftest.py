"""Shared fixtures for nl2tag tests."""

from __future__ import annotations

import pytest

from nl2tag.config import Settings


@pytest.fixture()
def settings() -> Settings:
    """Default settings, independent of any .env file."""
    return Settings()


@pytest.fixture()
def content_model(settings):
    return settings.content_model()


SAMPLE_TABLE = """\
<table>
  <tr>
    <td>first
cell</td>
  </tr>
</table>"""

SAMPLE_CHANGELOG = """\
Engine
* reworked tag ledger
+ added changelog mode
Docs
- removed stale notes"""
