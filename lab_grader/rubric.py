"""
Rubric for the 6-2 Node/Express lab.

The rubric is pure data: each task lists its signals (regex alternatives plus
feedback), the gates deciding full or half credit, and the rule deciding
whether the task was genuinely attempted. Scoring code never branches on a
specific task.

Scoring:
- Total 100 = 80 (five lab TODOs) + 20 (submission timing)
- Each TODO = 16 points: 8 completeness, 4 correctness, 4 quality
"""

from .models import AttemptRule, Rubric, Signal, SourceFile, Task


SOURCES: list[SourceFile] = [
    SourceFile(
        key="server",
        filename="server.js",
        candidates=[
            "server.js",
            "6-2-node-express/server.js",
            "6-2-node-express/src/server.js",
        ],
    ),
    SourceFile(
        key="random",
        filename="random.js",
        candidates=[
            "backend/utils/random.js",
            "6-2-node-express/backend/utils/random.js",
        ],
    ),
    SourceFile(
        key="quotes",
        filename="quotes.js",
        candidates=[
            "quotes.js",
            "backend/quotes.js",
            "6-2-node-express/backend/quotes.js",
        ],
    ),
]


APP_INIT = Task(
    key="todo1",
    label="TODO 1: Initialize Express App (server.js)",
    source="server",
    signals=[
        Signal(
            name="importedExpress",
            patterns=[
                r"""\bimport\s+express\s+from\s+["']express["']""",
                r"""\bconst\s+express\s*=\s*require\(["']express["']\)""",
            ],
            found="✅ Imported express.",
            missing="❌ Missing express import/require.",
        ),
        Signal(
            name="appCreated",
            patterns=[r"\bconst\s+app\s*=\s*express\(\)"],
            found="✅ Created app with express().",
            missing="❌ Missing app initialization.",
        ),
        Signal(
            name="portDefined",
            patterns=[
                r"\b(const|let|var)\s+PORT\s*=\s*3000\b",
                r"\b(process\.env\.PORT)\b",
            ],
            found="✅ Defined PORT (3000 or env).",
            missing="❌ Missing PORT constant.",
        ),
        Signal(
            name="listen",
            patterns=[r"\bapp\.listen\(\s*PORT", r"\bapp\.listen\("],
            found="✅ Started server with app.listen.",
            missing="❌ Missing app.listen.",
        ),
    ],
    correctness_gate=["listen"],
    quality_gate=["portDefined", "importedExpress"],
    attempt=AttemptRule(any_of=["listen", "appCreated", "importedExpress"]),
)


RANDOM_INT = Task(
    key="todo2",
    label="TODO 2: Random Integer Helper (backend/utils/random.js)",
    source="random",
    signals=[
        Signal(
            name="filePresent",
            found="✅ Found random.js.",
            missing="❌ Missing backend/utils/random.js.",
        ),
        Signal(
            name="exported",
            patterns=[
                r"\bexport\s+function\s+getRandomInt\s*\(",
                r"\bmodule\.exports\s*=\s*{[^}]*getRandomInt",
                r"\bexports\.getRandomInt\s*=\s*",
            ],
            found="✅ Exported getRandomInt.",
            missing="❌ getRandomInt not exported.",
        ),
        Signal(
            name="usesRandom",
            patterns=[r"Math\.random\s*\(\s*\)"],
            found="✅ Uses Math.random().",
            missing="❌ Missing Math.random().",
        ),
        Signal(
            name="usesFloor",
            patterns=[r"Math\.floor\s*\("],
            found="✅ Uses Math.floor().",
            missing="❌ Missing Math.floor().",
        ),
    ],
    correctness_gate=["usesRandom", "usesFloor"],
    quality_gate=["exported"],
    attempt=AttemptRule(all_of=["exported"], any_of=["usesRandom", "usesFloor"]),
)


RANDOM_QUOTE = Task(
    key="todo3",
    label="TODO 3: getRandomQuote (quotes.js)",
    source="quotes",
    signals=[
        Signal(
            name="filePresent",
            found="✅ Found quotes.js.",
            missing="❌ Missing quotes.js.",
        ),
        Signal(
            name="exported",
            patterns=[
                r"\bexport\s+function\s+getRandomQuote\s*\(",
                r"\bmodule\.exports\s*=\s*{[^}]*getRandomQuote",
                r"\bexports\.getRandomQuote\s*=\s*",
            ],
            found="✅ Exported getRandomQuote.",
            missing="❌ getRandomQuote not exported.",
        ),
        Signal(
            name="usesQuotesArray",
            patterns=[r"\bquotes\s*\[", r"\bquotes\s*=\s*\["],
            found="✅ Uses a quotes array.",
            missing="❌ No quotes array detected.",
        ),
        Signal(
            name="randomIndex",
            patterns=[r"Math\.floor\s*\(\s*Math\.random\(\)\s*\*\s*quotes\.length\s*\)"],
            found="✅ Selects random index via Math.floor(Math.random()*quotes.length).",
            missing="❌ No random index logic found.",
        ),
    ],
    correctness_gate=["randomIndex", "usesQuotesArray"],
    quality_gate=["exported"],
    attempt=AttemptRule(all_of=["exported"], any_of=["randomIndex", "usesQuotesArray"]),
)


CORS = Task(
    key="todo4",
    label="TODO 4: Enable CORS (server.js)",
    source="server",
    signals=[
        Signal(
            name="imported",
            patterns=[
                r"""\bimport\s+cors\s+from\s+["']cors["']""",
                r"""\bconst\s+cors\s*=\s*require\(["']cors["']\)""",
            ],
            found="✅ Imported cors.",
            missing="❌ Missing cors import/require.",
        ),
        Signal(
            name="used",
            patterns=[r"\bapp\.use\s*\(\s*cors\s*\(\s*\)\s*\)"],
            found="✅ Enabled CORS with app.use(cors()).",
            missing="❌ Missing app.use(cors()).",
        ),
    ],
    correctness_gate=["used"],
    quality_gate=["imported", "used"],
    attempt=AttemptRule(all_of=["used"]),
)


ROUTES = Task(
    key="todo5",
    label="TODO 5: Define Routes (server.js)",
    source="server",
    signals=[
        Signal(
            name="rootRoute",
            patterns=[r"""\bapp\.get\s*\(\s*["']/["']\s*,\s*\("""],
            found="✅ Route GET / is defined.",
            missing="❌ Missing route GET /.",
        ),
        Signal(
            name="rootSendsText",
            # The last alternative accepts any res.send("...") call.
            patterns=[
                r"""res\.send\s*\(\s*["'`][^"'`]*Quote Generator API[^"'`]*["'`]\s*\)""",
                r"""res\.send\s*\(\s*["'`][^"'`]*Welcome[^"'`]*["'`]\s*\)""",
                r"""res\.send\s*\(\s*["'`][^"'`]*["'`]\s*\)""",
            ],
            found="✅ GET / sends text via res.send().",
            missing="❌ GET / should send a welcome text.",
        ),
        Signal(
            name="quoteRoute",
            patterns=[r"""\bapp\.get\s*\(\s*["']/api/quote["']\s*,\s*\("""],
            found="✅ Route GET /api/quote is defined.",
            missing="❌ Missing route GET /api/quote.",
        ),
        Signal(
            name="resJson",
            patterns=[r"res\.json\s*\(\s*{[^}]*}\s*\)"],
            found="✅ GET /api/quote responds with res.json({ ... }).",
            missing="❌ GET /api/quote should return JSON.",
        ),
        Signal(
            name="importsHelper",
            patterns=[
                r"""\bimport\s*{?\s*getRandomQuote\s*}?\s*from\s*["'][^"']*quotes["']""",
                r"""\brequire\(["'][^"']*quotes["']\)""",
            ],
            found="✅ Server references getRandomQuote helper.",
            missing="❌ getRandomQuote not imported/required in server.",
        ),
    ],
    correctness_gate=["quoteRoute", "resJson"],
    quality_gate=["rootRoute", "quoteRoute"],
    attempt=AttemptRule(any_of=["rootRoute", "quoteRoute"]),
)


LAB_RUBRIC = Rubric(
    title="Lab Grade Summary",
    sources=SOURCES,
    tasks=[APP_INIT, RANDOM_INT, RANDOM_QUOTE, CORS, ROUTES],
)
