# tisemu

An emulator for a small TIS-100 style assembly language. It has a single node
with an accumulator (`acc`), a backup register (`bak`) and an input register
(`inpt`). The node runs a program one line at a time.

## Installing

```
pip install .
```

## Running a program

```
tisemu program.tis
tisemu --input 5 program.tis
tisemu --debug --color program.tis
```

Options:

- `-i`, `--input N`: sets the `inpt` register before the program starts.
- `-d`, `--debug`: prints the registers after every line that runs.
- `-c`, `--color`: colours the debug output, the error messages and any banner that comes after it on the command line.
- `--banner`: prints the banner.
- `-v`, `--version`: prints the version and exits.
- `-h`, `--help`: prints `help.txt` from the current directory and exits.
- `--doc`: prints `doc/doc.txt` from the current directory and exits.

The command exits with status 1 for an unknown option, when no input file is
given, or when the input file cannot be opened. When the program stops, the
command prints the CPU time it used as `work time N.NNNNNNs`.

## The language

Each line holds one instruction. Anything after `#` is a comment. A line of
the form `name:` defines a label.

| Instruction   | Effect                                                   |
|---------------|----------------------------------------------------------|
| `mov SRC DST` | copies `SRC` (a register, `nil` or a number) to `acc` or `out` |
| `sav`         | copies `acc` into `bak`                                  |
| `swp`         | swaps `acc` and `bak`                                    |
| `add SRC`     | adds `SRC` to `acc`                                      |
| `sub SRC`     | subtracts `SRC` from `acc`                               |
| `neg`         | negates `acc`                                            |
| `nop`         | sets `acc` to zero                                       |
| `jmp L`       | jumps to label `L`                                       |
| `jez L` / `jnz L` / `jgz L` / `jlz L` | jumps if `acc` is zero / non-zero / positive / negative |
| `jro SRC`     | jumps `SRC` lines forward or back from the current line  |

Writing to `out` prints the value on a line of its own. A source that is not a
register is read as a leading integer. A source that has no number in it
counts as 0.

Execution stops at the end of the program. It also stops at the first empty
line, and a line that holds only a comment counts as empty.

A malformed `mov`, `add`, `sub` or `jro`, or an unknown instruction, ends the
run with an error of the form `file:line: error: message`. A jump to an
unknown label, or a jump with no label, prints such an error and the run
continues.

Example:

```
mov 3 acc
loop:
mov acc out
sub 1
jgz loop
```

This prints `3`, `2` and `1`.

## Using it from Python

```python
import io

from tisemu.emulator import Emulator
from tisemu.errors import ProgramError

output = io.StringIO()
emu = Emulator(filename="example.tis", stdout=output)
emu.load("mov 2 acc\nadd 3\nmov acc out\n")
try:
    emu.run()
except ProgramError as err:
    print(err.format(color=False))
print(output.getvalue())   # "5\n"
print(emu.acc)             # 5
```

Parts of the Python interface:

- `Emulator` takes the fields `filename`, `inpt`, `debug`, `color`, `stdout` and `stderr`. When `stdout` or `stderr` is not given, the process streams are used.
- `Emulator.load(text)` reads the labels and the program lines from a source text.
- `Emulator.run()` runs the loaded program. `Emulator.exec_line(text)` runs a single line.
- `Emulator.debug_message()` returns the register dump as a string.
- `tisemu.emulator.str_to_token(text)` returns the `Token` for a keyword, or `None` if the text is not a keyword.
- `tisemu.cli.parse_args(argv)` turns arguments into `Options`. `tisemu.cli.banner(color)` returns the banner text. `tisemu.cli.main(argv=None)` runs the command.

## What it does not do

- The emulator runs one node only. It has no grid of nodes and no ports between nodes.
- The package does not include `help.txt` or `doc/doc.txt`. `--help` and `--doc` print those files only if they exist in the current directory. If a file is missing, the command reports an error and exits with status 1.