[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "petshop"
version = "0.1.0"
description = "A small REST backend for a pet shop: owners, pets, services and appointments stored in MongoDB."
requires-python = ">=3.10"
keywords = ["petshop", "rest", "api", "mongodb", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "pymongo>=4.2",
    "flask>=2.2",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
petshop = "petshop.app:main"
petshop-seed = "petshop.seed:main"

[tool.hatch.build.targets.wheel]
packages = ["petshop"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
