from pathlib import Path

import pytest

from lab_grader.config_loader import GraderConfig


SERVER_JS = """\
const express = require("express");
const cors = require("cors");
const { getRandomQuote } = require("./backend/quotes");

const app = express();
const PORT = 3000;

app.use(cors());

app.get("/", (req, res) => {
  res.send("Welcome to the Quote Generator API");
});

app.get("/api/quote", (req, res) => {
  res.json({ quote: getRandomQuote() });
});

app.listen(PORT, () => console.log(`Server running on ${PORT}`));
"""

APP_INIT_ONLY_JS = """\
import express from "express";

const app = express();
const PORT = 3000;

app.listen(PORT, () => {
  console.log("listening");
});
"""

RANDOM_JS = """\
function getRandomInt(max) {
  return Math.floor(Math.random() * max);
}

module.exports = { getRandomInt };
"""

QUOTES_JS = """\
const quotes = [
  "Stay hungry, stay foolish.",
  "Simplicity is the soul of efficiency.",
];

function getRandomQuote() {
  return quotes[Math.floor(Math.random() * quotes.length)];
}

module.exports = { getRandomQuote };
"""

QUOTES_NO_ARRAY_JS = """\
const { quotes } = require("./data");

function getRandomQuote() {
  const index = Math.floor(Math.random() * quotes.length);
  return quotes.at(index);
}

module.exports = { getRandomQuote };
"""


def write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def complete_submission(tmp_path: Path) -> Path:
    """A working tree where every TODO is implemented."""
    write(tmp_path, "server.js", SERVER_JS)
    write(tmp_path, "backend/utils/random.js", RANDOM_JS)
    write(tmp_path, "backend/quotes.js", QUOTES_JS)
    return tmp_path


@pytest.fixture
def config_for():
    def _make(root: Path, **kwargs) -> GraderConfig:
        return GraderConfig(root=root, **kwargs)
    return _make


@pytest.fixture(autouse=True)
def no_step_summary(monkeypatch):
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
