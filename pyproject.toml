[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nhostcli"
version = "0.1.0"
description = "Auth API client, secrets files, Traefik labels, docker compose wrapper and release downloads for a hosted backend project"
requires-python = ">=3.11"
keywords = ["backend", "docker-compose", "traefik", "secrets", "auth", "releases"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: POSIX",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "requests>=2.28",
    "pyyaml>=6.0",
    "tomli-w>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["nhostcli"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
