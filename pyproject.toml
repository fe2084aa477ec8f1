[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pgpkit"
version = "0.1.0"
description = "OpenPGP building blocks: algorithm identifiers, checksums, CFB encryption, key wrap, DSA and RSA primitives"
requires-python = ">=3.10"
keywords = ["openpgp", "pgp", "cryptography", "cfb", "aes-key-wrap", "dsa", "rsa", "twofish"]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["pgpkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
