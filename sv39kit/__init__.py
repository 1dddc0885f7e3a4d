"""Sv39 page tables, ELF and virtio layouts, a shell parser and small file tools."""

__version__ = "0.1.0"

__all__ = [
    "params",
    "printf",
    "ulib",
    "umalloc",
    "grep",
    "wc",
    "cat",
    "echo",
    "vm",
    "elf",
    "virtio",
    "sh",
    "rand",
    "fileutils",
    "ls",
]