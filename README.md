# octools

A small collection of command-line tools built around three pieces:

- **jell**, a tiny Clojure-flavoured Lisp with a REPL and a file runner;
- **octools-sh**, a minimal interactive shell with pipes, output
  redirection, `cd`, `export` and `exit`;
- **octools.paths**, lexical handling of slash-separated paths.

It has no dependencies outside the Python standard library and needs
Python 3.10 or later.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## jell

Start the REPL by running `jell` with no arguments:

```
$ jell
user=> (+ 1 2 3)
6

user=> (def square (fn [x] (* x x)))
nil

user=> (square 7)
49
```

An expression may span several lines; the prompt is indented while
brackets are still open. Evaluation errors are printed as
`error: <message>` and the REPL carries on. Pass a file name to run a
whole program instead; every expression in it is evaluated in order and a
newline is printed at the end:

```
jell program.jell
```

### The language

Values: integers, floats, strings (`"..."` with `\n`, `\t`, `\r`, `\\`
escapes), keywords (`:name`), `true`, `false`, `nil`, lists `( )`,
vectors `[ ]` and sets `#{ }`. `'x` is shorthand for `(quote x)`.

Special forms: `def`, `if`, `do`, `let`, `fn`, `quote`, `eval`.
`defmacro`, `loop` and `recur` are recognised but raise an error saying
they are not supported, and sets cannot be evaluated.

Built-ins:

| Group        | Names                                         |
|--------------|-----------------------------------------------|
| Arithmetic   | `+ - * /`                                     |
| Comparison   | `= < <= > >=`                                 |
| Logic        | `and or not`                                  |
| Predicates   | `string? int? float? keyword? symbol? list? vector?` |
| Collections  | `list vector first rest conj nth count`       |
| Output       | `print`                                       |

`if` requires its test to evaluate to a boolean; `and`, `or` and `not`
accept only booleans. Integer division truncates: `(/ 1 2)` is `0`, while
`(/ 1.0 2)` is `0.5`. `conj` appends to vectors and prepends to lists.

Recursive functions work through `let` or `def`:

```clojure
(def fib
  (fn [n]
    (if (<= n 2)
        1
        (+ (fib (- n 1)) (fib (- n 2))))))
(print (fib 10))
```

### From Python

```python
from octools.evaluator import Evaluator
from octools.environment import Environment
from octools.repl import run

evaluator = Evaluator()
env = Environment()
result = run("(let [x 4] (conj [1 2] 3 x))", evaluator, env)
print(result)  # [1 2 3 4]
```

`octools.lexer.tokenize` and `octools.parser.parse` / `parse_program`
expose the earlier stages. Errors are raised as `JellError` subclasses
from `octools.expr`: `LexicalError`, `JellSyntaxError` and
`JellRuntimeError`.

## octools-sh

```
$ octools-sh
$ echo hello | grep hell
hello
$ ls > listing.txt
$ export GREETING=hi
$ cd /tmp
$ exit
```

Commands may be chained with `|`; a command's output can be sent to a
file with `>` (overwrite) or `>>` (append). `cd` with no argument goes to
`/`. `export` with no arguments, or with `-p`, lists the environment as
`KEY: value` lines; `export KEY=value` sets a variable. If the file
`/etc/paths` exists, its lines are appended to `PATH` at start-up.

From Python, `octools.shell.Shell(stdin, stdout, stderr, environ)` runs
lines with `run_line()` (returning `False` on `exit`) or interactively
with `loop()`. `parse_command()`, `split_pipeline()` and `load_paths()`
are available on their own.

### What it does not do

The shell has no programs of its own besides `cd`, `export` and `exit`:
every other command is started as an external program found through
`PATH`. It does not support input redirection, quoting, globbing,
background jobs or scripts.

## Paths

`octools.paths.Path` offers lexical path handling: `components()`,
`parent()`, `ancestors()`, `file_name()`, `file_stem()`, `file_prefix()`,
`starts_with()`, `ends_with()` and `join()`, with `.` components
normalised away except at the start of a relative path. `is_dir()` and
`exists()` consult the file system.

```python
from octools.paths import Path

p = Path("/usr/lib/libc.so.6")
p.file_name()    # 'libc.so.6'
p.file_stem()    # 'libc.so'
p.file_prefix()  # 'libc'
p.parent()       # Path('/usr/lib')
```