"""Shared fixtures for unit tests."""

import json

import pytest

from contest_aggregator.infrastructure.http_client import HTTPResponse

PROBLEM_PAGE_HTML = """
<html>
<head><title>Problem - 1900A - Codeforces</title></head>
<body>
<div id="sidebar">
  <div class="roundbox sidebox">
    <span class="tag-box">greedy</span>
    <span class="tag-box">math</span>
    <span class="tag-box" title="Difficulty">*800</span>
  </div>
</div>
<div class="problemindexholder" problemindex="A">
<div class="ttypography">
<div class="problem-statement">
  <div class="header">
    <div class="title">A. Cover in Water</div>
    <div class="time-limit"><div class="property-title">time limit per test</div>1 second</div>
    <div class="memory-limit"><div class="property-title">memory limit per test</div>256 megabytes</div>
    <div class="input-file"><div class="property-title">input</div>standard input</div>
    <div class="output-file"><div class="property-title">output</div>standard output</div>
  </div>
  <div><p>Filip has a row of cells, some of which are blocked.</p></div>
  <div class="input-specification"><div class="section-title">Input</div><p>The first line contains <i>t</i>.</p></div>
  <div class="output-specification"><div class="section-title">Output</div><p>Print the answer.</p></div>
  <div class="sample-tests">
    <div class="section-title">Examples</div>
    <div class="sample-test">
      <div class="input"><div class="title">Input</div><pre><div class="test-example-line">2</div><div class="test-example-line">3</div><div class="test-example-line">...</div></pre></div>
      <div class="output"><div class="title">Output</div><pre>2
</pre></div>
    </div>
  </div>
  <div class="note"><div class="section-title">Note</div><p>In the first test case...</p></div>
</div>
</div>
</div>
</body>
</html>
"""

MINIMAL_PROBLEM_HTML = """
<html><body>
<div class="problem-statement">
  <div class="header"><div class="title">B. Minimal</div></div>
  <div><p>Just a statement.</p></div>
  <div class="note"></div>
</div>
</body></html>
"""


def api_response(result, status: int = 200, url: str = "https://codeforces.com/api") -> HTTPResponse:
    """Build a successful Codeforces API envelope."""
    return HTTPResponse(status=status, text=json.dumps({"status": "OK", "result": result}), url=url)


def api_failure(comment: str, status: int = 400) -> HTTPResponse:
    return HTTPResponse(
        status=status,
        text=json.dumps({"status": "FAILED", "comment": comment}),
        url="https://codeforces.com/api",
    )


def contest_entry(contest_id: int, name: str, phase: str = "FINISHED") -> dict:
    return {
        "id": contest_id,
        "name": name,
        "type": "CF",
        "phase": phase,
        "frozen": False,
        "durationSeconds": 7200,
        "startTimeSeconds": 1_700_000_000 + contest_id,
    }


@pytest.fixture
def problem_page_html() -> str:
    return PROBLEM_PAGE_HTML


@pytest.fixture
def minimal_problem_html() -> str:
    return MINIMAL_PROBLEM_HTML
