[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "codekata"
version = "0.1.0"
description = "Small algorithms, concurrency patterns and tiny aiohttp services"
requires-python = ">=3.10"
keywords = [
    "algorithms",
    "binary-search-tree",
    "linked-list",
    "worker-pool",
    "graceful-shutdown",
    "websocket",
    "rest-api",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "aiohttp",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
codekata-books = "codekata.books_api:main"
codekata-echo = "codekata.echo_ws:main"
codekata-duplex = "codekata.duplex_ws:main"

[tool.hatch.build.targets.wheel]
packages = ["codekata"]

[tool.pytest.ini_options]
addopts = "-ra"
