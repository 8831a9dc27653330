# mircore/cfg.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union, assert_never

from .ir import (
    ArgDecl, FnConverging, FnOutput, ConstVal, Lvalue, Mutability,
    Operand, Statement, TempDecl, VarDecl, Arg, Temp, Var, fmt_const_val,
)

BasicBlock = int  # dense, zero-based block index


# ---------- Terminators ----------
@dataclass(frozen=True)
class Goto:
    target: BasicBlock


@dataclass(frozen=True)
class If:
    cond: Operand
    targets: Tuple[BasicBlock, BasicBlock]  # (then, else)


@dataclass(frozen=True)
class Switch:
    """Branch on an enum discriminant, one target per variant."""
    discr: Lvalue
    variants: List[str]
    targets: List[BasicBlock]


@dataclass(frozen=True)
class SwitchInt:
    """Branch on an integer; targets has one extra trailing 'otherwise' entry."""
    discr: Lvalue
    values: List[ConstVal]
    targets: List[BasicBlock]


@dataclass(frozen=True)
class Call:
    func: Operand
    args: List[Operand]
    destination: Optional[Tuple[Lvalue, BasicBlock]] = None
    cleanup: Optional[BasicBlock] = None


@dataclass(frozen=True)
class Drop:
    value: Lvalue
    target: BasicBlock
    unwind: Optional[BasicBlock] = None


@dataclass(frozen=True)
class Return:
    pass


@dataclass(frozen=True)
class Resume:
    pass


@dataclass(frozen=True)
class Unreachable:
    pass


Terminator = Union[Goto, If, Switch, SwitchInt, Call, Drop, Return, Resume, Unreachable]


def successor_edges(term: Terminator) -> Tuple[List[BasicBlock], List[str]]:
    """Return the successor blocks of `term` and the edge label for each.

    The two lists are index-aligned: labels[i] describes the edge to
    successors[i].
    """
    if isinstance(term, Goto):
        return [term.target], [""]
    if isinstance(term, If):
        return list(term.targets), ["true", "false"]
    if isinstance(term, Switch):
        return list(term.targets), list(term.variants)
    if isinstance(term, SwitchInt):
        labels = [fmt_const_val(v) for v in term.values] + ["otherwise"]
        return list(term.targets), labels
    if isinstance(term, Call):
        succs, labels = [], []
        if term.destination is not None:
            succs.append(term.destination[1])
            labels.append("return")
        if term.cleanup is not None:
            succs.append(term.cleanup)
            labels.append("unwind")
        return succs, labels
    if isinstance(term, Drop):
        if term.unwind is None:
            return [term.target], ["return"]
        return [term.target, term.unwind], ["return", "unwind"]
    if isinstance(term, (Return, Resume, Unreachable)):
        return [], []
    assert_never(term)


def successors(term: Terminator) -> List[BasicBlock]:
    return successor_edges(term)[0]


def successor_labels(term: Terminator) -> List[str]:
    return successor_edges(term)[1]


def fmt_head(term: Terminator) -> str:
    """Terminator text without the successor list (that goes on the edges)."""
    if isinstance(term, Goto):
        return "goto"
    if isinstance(term, If):
        return f"if({term.cond.fmt_debug()})"
    if isinstance(term, Switch):
        return f"switch({term.discr.fmt_debug()})"
    if isinstance(term, SwitchInt):
        return f"switchInt({term.discr.fmt_debug()})"
    if isinstance(term, Call):
        dest = ""
        if term.destination is not None:
            dest = f"{term.destination[0].fmt_debug()} = "
        args = ", ".join(a.fmt_debug() for a in term.args)
        return f"{dest}{term.func.fmt_debug()}({args})"
    if isinstance(term, Drop):
        return f"drop({term.value.fmt_debug()})"
    if isinstance(term, Return):
        return "return"
    if isinstance(term, Resume):
        return "resume"
    if isinstance(term, Unreachable):
        return "unreachable"
    assert_never(term)


def fmt_terminator(term: Terminator) -> str:
    head = fmt_head(term)
    succs, labels = successor_edges(term)
    if not succs:
        return head
    if len(succs) == 1:
        return f"{head} -> bb{succs[0]}"
    pairs = ", ".join(f"{label}: bb{bb}" for bb, label in zip(succs, labels, strict=True))
    return f"{head} -> [{pairs}]"


# ---------- Blocks / graph ----------
@dataclass
class BasicBlockData:
    terminator: Terminator
    statements: List[Statement] = field(default_factory=list)


@dataclass
class Mir:
    basic_blocks: List[BasicBlockData]
    return_ty: FnOutput
    arg_decls: List[ArgDecl] = field(default_factory=list)
    var_decls: List[VarDecl] = field(default_factory=list)
    temp_decls: List[TempDecl] = field(default_factory=list)

    def all_basic_blocks(self) -> Iterator[BasicBlock]:
        return iter(range(len(self.basic_blocks)))

    def basic_block_data(self, bb: BasicBlock) -> BasicBlockData:
        return self.basic_blocks[bb]


def fmt_return_ty(ret: FnOutput) -> str:
    return ret.ty.fmt_debug() if isinstance(ret, FnConverging) else "!"


def pretty_mir(func_name: str, mir: Mir) -> str:
    args = ", ".join(f"{Arg(i)}: {a.ty}" for i, a in enumerate(mir.arg_decls))
    lines = [f"fn {func_name}({args}) -> {fmt_return_ty(mir.return_ty)} {{"]
    for i, var in enumerate(mir.var_decls):
        mut = "mut " if var.mutability is Mutability.MUT else ""
        lines.append(f"    let {mut}{Var(i)}: {var.ty}; // {var.name}")
    for i, temp in enumerate(mir.temp_decls):
        lines.append(f"    let mut {Temp(i)}: {temp.ty};")
    for bb in mir.all_basic_blocks():
        data = mir.basic_block_data(bb)
        lines.append("")
        lines.append(f"    bb{bb}: {{")
        for stmt in data.statements:
            lines.append(f"        {stmt};")
        lines.append(f"        {fmt_terminator(data.terminator)};")
        lines.append("    }")
    lines.append("}")
    return "\n".join(lines)
