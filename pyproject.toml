[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "circomfold"
version = "0.1.0"
description = "Circom R1CS and witness file readers, NIVC ROM setup data and circuit input preparation over the BN254 scalar field"
requires-python = ">=3.10"
dependencies = []
keywords = ["circom", "r1cs", "witness", "zero-knowledge", "nivc", "folding", "bn254"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["circomfold"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
