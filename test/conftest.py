import json

import pytest


def build_embedded_data(
    version="1.4.2", release_notes="Bug fixes<br>Faster &amp; smaller"
):
    details = [None] * 145
    details[140] = [[[version]]]
    details[144] = [None, [None, release_notes]]
    return [None, [None, None, details]]


def build_embedded_script(data) -> str:
    return (
        "AF_initDataCallback("
        f"{{key: 'ds:5', hash: '7', data:{json.dumps(data)}, sideChannel: {{}}}}"
        ");"
    )


def build_play_page(*scripts: str, body: str = "") -> str:
    script_tags = "".join(
        f'<script nonce="abc">{script}</script>' for script in scripts
    )
    return (
        "<!doctype html><html><head><meta charset=utf-8>"
        f"{script_tags}</head><body>{body}</body></html>"
    )


STRUCTURED_BODY = """
<div class="xyz">
  <div class="hAyfc"><div class="BgcNfc">Updated</div>
    <span class="htlgb"><div class="IQ1z0d">March 1, 2020</div></span></div>
  <div class="hAyfc"><div class="BgcNfc">Current Version</div>
    <span class="htlgb">2.3.1</span></div>
</div>
<div class="W4P4ne"><h2 class="wSaTQd">About this app</h2></div>
<div class="W4P4ne">
  <h2 class="wSaTQd">What's New</h2>
  <div class="PHBdkd"><div class="DWPxHb">  Fixed 3 bugs  </div></div>
</div>
"""


@pytest.fixture
def apple_body() -> str:
    return json.dumps(
        {
            "resultCount": 1,
            "results": [
                {
                    "version": "1.2.0",
                    "trackViewUrl": "https://apps.apple.com/x",
                    "releaseNotes": "Bug fixes",
                }
            ],
        }
    )


@pytest.fixture
def play_embedded_html() -> str:
    return build_play_page(
        "AF_initDataCallback({key: 'ds:4', hash: '1', data:[], sideChannel: {}});",
        build_embedded_script(build_embedded_data()),
    )


@pytest.fixture
def play_structured_html() -> str:
    return build_play_page(body=STRUCTURED_BODY)
