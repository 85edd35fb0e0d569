[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cassobee"
version = "0.1.0"
description = "Building blocks for server processes: buffers, locks, thread pools, delegates, AES helpers and a pattern-based logging stack"
requires-python = ">=3.10"
keywords = ["logging", "threadpool", "ring-buffer", "left-right", "delegate", "aes", "rwlock"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Logging",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cassobee"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
