[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "solhttp"
version = "0.1.0"
description = "HTTP server that generates Solana keypairs, signs and verifies messages, and builds token and transfer instructions"
requires-python = ">=3.10"
keywords = ["solana", "http", "server", "spl-token", "ed25519", "base58"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "pynacl>=1.5",
    "starlette>=0.27",
    "uvicorn>=0.23",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "httpx>=0.24",
]

[project.scripts]
solhttp = "solhttp.server:main"

[tool.hatch.build.targets.wheel]
packages = ["solhttp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
