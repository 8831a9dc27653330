"""Shared MIR fixtures for renderer tests."""

import pytest

from mircore.cfg import BasicBlockData, Call, Goto, If, Mir, Return, SwitchInt
from mircore.ir import (
    ArgDecl, BinOp, BinaryOp, Constant, Consume, FnConverging, FnDiverging,
    Mutability, Statement, Static, Temp, TempDecl, Ty, Use, Var, VarDecl, Arg,
    ReturnPointer,
)


@pytest.fixture
def i32():
    return Ty("i32")


@pytest.fixture
def single_return_mir(i32):
    """One block, no statements, returns immediately."""
    return Mir(
        basic_blocks=[BasicBlockData(terminator=Return())],
        return_ty=FnConverging(Ty("()")),
    )


@pytest.fixture
def loop_mir(i32):
    """bb0 branches back to itself or on to bb1, which returns."""
    return Mir(
        basic_blocks=[
            BasicBlockData(
                statements=[Statement(Var(0), BinaryOp(BinOp.LT, Consume(Arg(0)), Constant(i32, 10)))],
                terminator=If(Consume(Var(0)), (0, 1)),
            ),
            BasicBlockData(terminator=Return()),
        ],
        return_ty=FnConverging(Ty("()")),
        arg_decls=[ArgDecl(i32)],
        var_decls=[VarDecl(Mutability.NOT, "done", Ty("bool"))],
    )


@pytest.fixture
def mut_var_mir(i32):
    """A mutable named variable and a temporary of the same type."""
    return Mir(
        basic_blocks=[
            BasicBlockData(
                statements=[
                    Statement(Temp(0), Use(Constant(i32, 1))),
                    Statement(Var(0), Use(Consume(Temp(0)))),
                    Statement(ReturnPointer(), Use(Consume(Var(0)))),
                ],
                terminator=Return(),
            ),
        ],
        return_ty=FnConverging(i32),
        var_decls=[VarDecl(Mutability.MUT, "x", i32)],
        temp_decls=[TempDecl(i32)],
    )


@pytest.fixture
def call_mir(i32):
    """Generic-typed call with both a return and an unwind edge."""
    vec = Ty("Vec<i32>")
    return Mir(
        basic_blocks=[
            BasicBlockData(
                terminator=Call(
                    func=Consume(Static("new::<i32>")),
                    args=[],
                    destination=(Temp(0), 1),
                    cleanup=3,
                ),
            ),
            BasicBlockData(
                terminator=SwitchInt(Arg(0), [1, 2], [2, 2, 3]),
            ),
            BasicBlockData(terminator=Goto(3)),
            BasicBlockData(terminator=Return()),
        ],
        return_ty=FnDiverging(),
        arg_decls=[ArgDecl(i32), ArgDecl(Ty("&str"))],
        temp_decls=[TempDecl(vec)],
    )
