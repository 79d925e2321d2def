[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zapkit"
version = "0.1.0"
description = "Structured logging building blocks: write syncers, an in-memory observer core, a gRPC-style logger adapter and a line-splitting log writer."
requires-python = ">=3.11"
dependencies = []
keywords = ["logging", "structured-logging", "observer", "testing", "grpc"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zapkit"]

[tool.pytest.ini_options]
addopts = "-ra"
