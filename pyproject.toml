[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockconfirm"
version = "0.1.0"
description = "Blockchain block, event and transaction data types, with a non-blocking buffer for block hash events"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "blocks", "confirmations", "events", "transactions", "buffer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "pytest-timeout"]

[tool.hatch.build.targets.wheel]
packages = ["blockconfirm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
