[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sv39kit"
version = "0.1.0"
description = "Sv39 page tables over simulated memory, ELF and virtio layouts, a shell command parser and small file tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sv39",
    "risc-v",
    "page table",
    "virtio",
    "elf",
    "shell parser",
    "grep",
    "malloc",
    "teaching",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sv39-cat = "sv39kit.cat:main"
sv39-echo = "sv39kit.echo:main"
sv39-grep = "sv39kit.grep:main"
sv39-wc = "sv39kit.wc:main"
sv39-ls = "sv39kit.ls:main"
sv39-kill = "sv39kit.fileutils:kill_main"
sv39-ln = "sv39kit.fileutils:ln_main"
sv39-mkdir = "sv39kit.fileutils:mkdir_main"
sv39-rm = "sv39kit.fileutils:rm_main"
sv39-mkfifo = "sv39kit.fileutils:mkfifo_main"

[tool.hatch.build.targets.wheel]
packages = ["sv39kit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
