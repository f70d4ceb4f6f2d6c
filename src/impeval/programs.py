"""Sample Imp programs, built directly as ASTs."""

from __future__ import annotations

from dataclasses import dataclass, field

from impeval.core.ast import (
    TRUE,
    Assign,
    Com,
    Id,
    If,
    Not,
    Num,
    Skip,
    While,
    eq,
    le,
    minus,
    mult,
    plus,
    seq,
)
from impeval.core.errors import UnknownProgram
from impeval.core.state import State

X, Y, Z = Id("X"), Id("Y"), Id("Z")


@dataclass(frozen=True)
class Program:
    """A named program with the state it is normally started from."""

    name: str
    description: str
    command: Com
    initial: State = field(default_factory=State.empty)


# X := X + 2
PLUS2 = Assign("X", plus(X, Num(2)))

# Z := X * Y
X_TIMES_Y_IN_Z = Assign("Z", mult(X, Y))

# while X != 0 do Z := Z - 1; X := X - 1 end
SUBTRACT_SLOWLY = While(
    Not(eq(X, Num(0))),
    seq(
        Assign("Z", minus(Z, Num(1))),
        Assign("X", minus(X, Num(1))),
    ),
)

# Z := X; Y := 1; while Z != 0 do Y := Y * Z; Z := Z - 1 end
FACTORIAL = seq(
    Assign("Z", X),
    Assign("Y", Num(1)),
    While(
        Not(eq(Z, Num(0))),
        seq(
            Assign("Y", mult(Y, Z)),
            Assign("Z", minus(Z, Num(1))),
        ),
    ),
)

# X := 2; if X <= 1 then Y := 3 else Z := 4
BRANCH_ON_X = seq(
    Assign("X", Num(2)),
    If(le(X, Num(1)), Assign("Y", Num(3)), Assign("Z", Num(4))),
)

# Y := 0; Z := X; while Z != 0 do Y := Y + Z; Z := Z - 1; X := X - 1 end
SUM_TO_X = seq(
    Assign("Y", Num(0)),
    Assign("Z", X),
    While(
        Not(eq(Z, Num(0))),
        seq(
            Assign("Y", plus(Y, Z)),
            Assign("Z", minus(Z, Num(1))),
            Assign("X", minus(X, Num(1))),
        ),
    ),
)

# Z := X; while 2 <= Z do Z := Z - 2 end
PARITY = seq(
    Assign("Z", X),
    While(le(Num(2), Z), Assign("Z", minus(Z, Num(2)))),
)

# while true do skip end
LOOP_FOREVER = While(TRUE, Skip())


PROGRAMS: dict[str, Program] = {
    program.name: program
    for program in [
        Program("plus2", "X := X + 2", PLUS2, State.of(X=3)),
        Program("x_times_y_in_z", "Z := X * Y", X_TIMES_Y_IN_Z, State.of(X=6, Y=7)),
        Program("subtract_slowly", "Subtract X from Z one unit at a time", SUBTRACT_SLOWLY, State.of(X=3, Z=5)),
        Program("factorial", "Y := X!", FACTORIAL, State.of(X=5)),
        Program("branch_on_x", "X := 2; if X <= 1 then Y := 3 else Z := 4", BRANCH_ON_X, State.of(X=2)),
        Program("sum_to_x", "Y := 1 + 2 + ... + X", SUM_TO_X, State.of(X=5)),
        Program("parity", "Z := X mod 2, for X >= 0", PARITY, State.of(X=7)),
        Program("loop_forever", "Never terminates", LOOP_FOREVER),
    ]
}


def get_program(name: str) -> Program:
    """Look up a sample program by name.

    Raises:
        UnknownProgram: If no program has this name.
    """
    try:
        return PROGRAMS[name]
    except KeyError:
        raise UnknownProgram(name) from None


def list_programs() -> list[Program]:
    return sorted(PROGRAMS.values(), key=lambda program: program.name)
