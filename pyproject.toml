[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "suarakan"
version = "0.1.0"
description = "Backend logic for filing, tracking and publishing incident reports"
requires-python = ">=3.10"
keywords = ["reports", "publications", "jwt", "sqlalchemy", "backend"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "sqlalchemy>=2.0",
    "pyjwt>=2.4",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[tool.hatch.build.targets.wheel]
packages = ["suarakan"]

[tool.pytest.ini_options]
addopts = "-ra"
