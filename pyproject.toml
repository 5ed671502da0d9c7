[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yearning-notify"
version = "0.1.0"
description = "Notification channels (DingTalk, WeCom, SMTP, webhooks) and approval-workflow helpers for a SQL audit platform"
requires-python = ">=3.10"
dependencies = []
keywords = ["dingtalk", "wecom", "webhook", "smtp", "notification", "sql-audit", "workflow"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
    "Topic :: Communications :: Email",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["yearning_notify"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
