[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webrpc"
version = "0.6.0"
description = "Schema model, RIDL lexer and JavaScript/TypeScript helpers for webrpc service definitions"
requires-python = ">=3.10"
dependencies = []
keywords = ["rpc", "schema", "code-generation", "ridl", "json", "typescript", "javascript"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["webrpc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
