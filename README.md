# sv39kit

Pure-Python models of the parts of a small RISC-V teaching system that
make sense outside the machine, plus a handful of command-line tools.

## Modules

- `sv39kit.vm`: Sv39 three-level page tables kept inside a simulated pool
  of physical pages. `PhysicalMemory(npages)` hands out pages with
  `kalloc()` / `kfree(pa)` and exposes their bytes with `page(pa)`.
  `PageTable(memory)` offers `walk`, `walkaddr`, `mappages`, `unmap`,
  `first`, `grow`, `shrink`, `free`, `copy_to`, `clear_user`, `copyout`,
  `copyin` and `copyinstr`. Entry bits are in `PteFlag`. Invalid
  operations raise `VmError`; running out of pages raises `MemoryError`.
- `sv39kit.elf`: ELF64 file and program headers (`ElfHeader`,
  `ProgramHeader`) with `pack()` / `unpack()`, and `program_headers(data)`
  to iterate over the segments of an image. Bad input raises `ElfError`.
- `sv39kit.virtio`: virtio MMIO register offsets (`MmioRegister`), status
  bits (`ConfigStatus`), feature-bit numbers, and the packed queue
  structures `Descriptor`, `AvailRing`, `UsedElem`, `UsedRing` and
  `BlockRequest`.
- `sv39kit.params`: system limits, memory-layout addresses and helpers
  (`clint_mtimecmp`, `plic_senable`, `plic_sclaim`, `kstack`, ...),
  open flags (`OpenFlag`), file kinds (`FileType`) and `Stat`.
- `sv39kit.umalloc`: `Heap(limit)`, a first-fit, address-ordered free-list
  allocator over a simulated arena, with `malloc`, `free` and
  `free_blocks`. It raises `OutOfMemory` once the arena cannot grow.
- `sv39kit.printf`: a small formatter for `%d %l %x %p %s %c %%`
  (`render`, `fprintf`, `printf`). Integers are taken as 32-bit values;
  unknown conversions are copied through with their percent sign.
- `sv39kit.ulib`: `atoi`, `gets` and `strcmp`.
- `sv39kit.sh`: the shell's tokenizer and parser (`tokenize`,
  `parse_command`) producing trees of `ExecCmd`, `RedirCmd`, `PipeCmd`,
  `ListCmd` and `BackCmd`. Malformed lines raise `ShellSyntaxError`.
- `sv39kit.grep`: a matcher for `^ . * $` (`match`) and a line filter
  (`grep`) that yields matching newline-terminated lines.
- `sv39kit.wc`: `count(stream)` returns `Counts(lines, words, chars)` for a
  binary stream.
- `sv39kit.rand`: the Park–Miller generator (`do_rand`, `ParkMiller`).
- `sv39kit.cat`, `sv39kit.echo`, `sv39kit.ls`, `sv39kit.fileutils`: the
  command-line tools below.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Library use

```python
from sv39kit.vm import PhysicalMemory, PageTable, PteFlag
from sv39kit.grep import match
from sv39kit.printf import render
from sv39kit.sh import parse_command
from sv39kit.umalloc import Heap

memory = PhysicalMemory(64)
pagetable = PageTable(memory)
size = pagetable.grow(0, 8192, PteFlag.W)
pagetable.copyout(100, b"hello\0")
assert pagetable.copyinstr(100, 32) == b"hello"

assert match("^ab*c$", "abbbc")
print(render("%d %x %s", -5, 255, "hi"))   # -5 FF hi

tree = parse_command("echo hi | wc > out; ls &")
print(tree)

heap = Heap(1 << 20)
addr = heap.malloc(100)
heap.free(addr)
```

## Commands

Each tool is installed as a command:

```
sv39-echo hello world
sv39-cat notes.txt
sv39-grep '^#' notes.txt
sv39-wc notes.txt
sv39-ls .
sv39-mkdir newdir
sv39-ln notes.txt notes-link.txt
sv39-rm notes-link.txt
sv39-mkfifo pipe0
sv39-kill 12345
```

With no file arguments, `sv39-cat`, `sv39-grep` and `sv39-wc` read
standard input, and `sv39-ls` lists the current directory. `sv39-grep`
only reports lines that end in a newline. `sv39-ls` prints name, kind
number, inode number and size; for a directory it lists `.`, `..` and the
entries in sorted order. `sv39-rm` removes files and empty directories,
`sv39-kill` sends SIGTERM and ignores failures. `sv39-mkdir`, `sv39-rm`
and `sv39-mkfifo` stop at the first path they cannot handle.

## What it does not do

- `sv39kit.sh` only parses command lines; there is no interactive shell
  and nothing runs the parsed trees.
- `sv39kit.vm` models address spaces only: there are no processes,
  scheduling, traps or system calls, and nothing loads ELF images into a
  page table.
- There is no file system or disk-image builder; `sv39kit.virtio`
  describes the device's structures but drives no device.
- `sv39kit.rand` provides the generator only; there is no stress-test
  runner.