[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ironspider"
version = "0.1.0"
description = "A small asynchronous web crawling framework with spiders, a scheduler, a rate-limited downloader and typed item pipelines."
requires-python = ">=3.10"
keywords = ["crawler", "spider", "scraping", "asyncio", "web"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "httpx>=0.24",
    "beautifulsoup4>=4.11",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "pytest-asyncio>=0.21",
    "respx>=0.20",
]

[project.scripts]
ironspider-example = "ironspider.example:main"

[tool.hatch.build.targets.wheel]
packages = ["ironspider"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
