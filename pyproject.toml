[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "examplekit"
version = "0.1.0"
description = "Small, self-contained example programs: HTML link tools, an expression evaluator, toy servers, concurrency patterns and more."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "examples",
    "teaching",
    "html",
    "expression-evaluator",
    "concurrency",
    "memoization",
    "crawler",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ek-findlinks = "examplekit.htmltree:main"
ek-outline = "examplekit.htmltree:outline_main"
ek-weblinks = "examplekit.links:main"
ek-title = "examplekit.title:main"
ek-fetch = "examplekit.webget:main"
ek-wait = "examplekit.webget:wait_main"
ek-surface = "examplekit.surface:main"
ek-toposort = "examplekit.toposort:main"
ek-tempflag = "examplekit.tempconv:main"
ek-sleep = "examplekit.durations:main"
ek-sorting = "examplekit.sorting:main"
ek-xmlselect = "examplekit.xmlselect:main"
ek-countdown = "examplekit.countdown:main"
ek-shop = "examplekit.shop:main"
ek-thumbnail = "examplekit.thumbnail:main"
ek-du = "examplekit.du:main"
ek-pipeline = "examplekit.pipeline:main"
ek-spinner = "examplekit.spinner:main"
ek-crawl = "examplekit.crawl:main"
ek-chat = "examplekit.chat:main"
ek-clock = "examplekit.clock:main"
ek-netcat = "examplekit.netcat:main"
ek-reverb = "examplekit.reverb:main"

[tool.hatch.build.targets.wheel]
packages = ["examplekit"]

[tool.hatch.build.targets.sdist]
include = ["examplekit", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
