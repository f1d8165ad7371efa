[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "m2ebridge"
version = "0.1.0"
description = "Message bridge core: filter pipeline stages, a JSON configuration store and a ZeroMQ control socket"
requires-python = ">=3.10"
keywords = ["bridge", "pipeline", "filter", "messaging", "zeromq", "cbor", "json"]
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
    "Topic :: Communications",
]
dependencies = [
    "cbor2>=5.4",
    "pyzmq>=25.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "cbor2>=5.4",
    "pyzmq>=25.0",
]

[tool.hatch.build.targets.wheel]
packages = ["m2ebridge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
