[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "octools"
version = "0.1.0"
description = "A small Clojure-flavoured Lisp interpreter, a minimal pipe-capable shell and lexical path handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["lisp", "interpreter", "repl", "shell", "clojure", "paths"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jell = "octools.repl:main"
octools-sh = "octools.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["octools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
