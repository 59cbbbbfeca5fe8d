[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bobsql"
version = "0.1.0"
description = "Transpile a compact schema and query language into SQL for SQLite, MariaDB and PostgreSQL"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "transpiler", "schema", "sqlite", "mariadb", "postgresql", "query-builder"]
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
    "Programming Language :: SQL",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bobsql"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
