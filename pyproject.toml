[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledgerlab"
version = "0.1.0"
description = "UTXO transaction validation, fee-ordered transaction handling and a trust-based consensus simulation"
requires-python = ">=3.10"
keywords = ["utxo", "ledger", "transactions", "consensus", "rsa", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ledgerlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
