"""Verdict test configuration and fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add the project root to path for imports
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from verdict.events import FeatureStarted, ScenarioStarted  # noqa: E402
from verdict.reporting import ReportBuilder  # noqa: E402


SAMPLE_LOG = """\
version: 1
name: Nightly smoke
events:
  - event: feature_started
    cid: "0-0"
    id: login
    name: Login
    tags: ["@smoke"]
    uri: features/login.feature
    line: 1
  - event: scenario_started
    cid: "0-0"
    parent_id: login
    id: valid-login
    name: Valid login
    line: 3
  - event: hook_finished
    cid: "0-0"
    parent_id: valid-login
    id: before-1
    name: open browser
    keyword: Before
  - event: step_finished
    cid: "0-0"
    parent_id: valid-login
    id: step-1
    name: I enter my credentials
    keyword: "Given "
    line: 4
    arguments: [admin]
    result:
      status: passed
      duration: 1200
  - event: step_finished
    cid: "0-0"
    parent_id: valid-login
    id: step-2
    name: I see the dashboard
    keyword: "Then "
    line: 5
    result:
      status: failed
      error_message: dashboard not visible
    embeddings:
      - data: aGVsbG8=
        mime_type: image/png
  - event: scenario_finished
    cid: "0-0"
    parent_id: login
    id: valid-login
  - event: feature_started
    cid: "0-1"
    id: search
    name: Search
  - event: feature_started
    cid: "0-1"
    id: empty
    name: Nothing ran here
  - event: scenario_started
    cid: "0-1"
    parent_id: search
    id: by-title
    name: Search by title
  - event: step_finished
    cid: "0-1"
    parent_id: by-title
    id: step-1
    name: I search for "{title}"
    arguments: [Dune, Emma]
  - event: run_metadata
    cid: "0-1"
    browser: firefox
    device: desktop
"""


@pytest.fixture
def builder() -> ReportBuilder:
    """Return a fresh report builder."""
    return ReportBuilder()


@pytest.fixture
def login_builder(builder: ReportBuilder) -> ReportBuilder:
    """A builder holding context "c1" with feature F1 and scenario S1."""
    builder.add_feature(FeatureStarted(cid="c1", id="F1", name="Login"))
    builder.add_scenario(ScenarioStarted(cid="c1", parent_id="F1", id="S1", name="Valid login"))
    return builder


@pytest.fixture
def sample_log_path(tmp_path: Path) -> Path:
    """Write the sample event log to a temporary file."""
    path = tmp_path / "events.yaml"
    path.write_text(SAMPLE_LOG)
    return path

