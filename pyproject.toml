[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sigkit"
version = "0.1.0"
description = "Pure-Python DSA parameter generation, RFC 6979 nonces, and DSA, ECDSA and Ed25519 signature containers with DER/PEM encoding"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "dsa",
    "ecdsa",
    "ed25519",
    "rfc6979",
    "signature",
    "der",
    "pkcs8",
    "pem",
    "cryptography",
]
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
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sigkit"]

[tool.hatch.build.targets.sdist]
include = ["sigkit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
