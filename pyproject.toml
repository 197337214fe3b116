[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "auctionkit"
version = "0.1.0"
description = "Thread-based auction, disk scheduling, message-passing tasks and synchronization primitives, with classic containers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "auction",
    "threads",
    "semaphore",
    "mutex",
    "monitor",
    "message-passing",
    "priority-queue",
    "disk-scheduling",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
auctionkit-demo = "auctionkit.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["auctionkit"]

[tool.pytest.ini_options]
addopts = "-ra"
