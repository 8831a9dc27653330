# mircore/ir.py
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Union


class Debug(ABC):
    """Values that know how to print themselves for debug output.

    Everything that ends up inside a rendered graph label goes through
    fmt_debug(); there is no repr() fallback.
    """

    @abstractmethod
    def fmt_debug(self) -> str: ...

    def __str__(self) -> str:
        return self.fmt_debug()


class Mutability(Enum):
    MUT = "mut"
    NOT = "not"


@dataclass(frozen=True)
class Ty(Debug):
    name: str

    def fmt_debug(self) -> str:
        return self.name


# ---------- Lvalues ----------
@dataclass(frozen=True)
class Var(Debug):
    index: int

    def fmt_debug(self) -> str:
        return f"var{self.index}"


@dataclass(frozen=True)
class Temp(Debug):
    index: int

    def fmt_debug(self) -> str:
        return f"tmp{self.index}"


@dataclass(frozen=True)
class Arg(Debug):
    index: int

    def fmt_debug(self) -> str:
        return f"arg{self.index}"


@dataclass(frozen=True)
class ReturnPointer(Debug):
    def fmt_debug(self) -> str:
        return "return"


@dataclass(frozen=True)
class Static(Debug):
    path: str

    def fmt_debug(self) -> str:
        return f"static({self.path})"


@dataclass(frozen=True)
class Deref:
    pass


@dataclass(frozen=True)
class Field:
    index: int


@dataclass(frozen=True)
class Index:
    operand: "Operand"


ProjectionElem = Union[Deref, Field, Index]


@dataclass(frozen=True)
class Projection(Debug):
    base: "Lvalue"
    elem: ProjectionElem

    def fmt_debug(self) -> str:
        base = self.base.fmt_debug()
        if isinstance(self.elem, Deref):
            return f"(*{base})"
        if isinstance(self.elem, Field):
            return f"{base}.{self.elem.index}"
        return f"{base}[{self.elem.operand.fmt_debug()}]"


Lvalue = Union[Var, Temp, Arg, ReturnPointer, Static, Projection]


# ---------- Operands ----------
ConstVal = Union[bool, int, str]


def fmt_const_val(value: ConstVal) -> str:
    # bool is checked first, it is also an int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


@dataclass(frozen=True)
class Consume(Debug):
    lvalue: Lvalue

    def fmt_debug(self) -> str:
        return self.lvalue.fmt_debug()


@dataclass(frozen=True)
class Constant(Debug):
    ty: Ty
    literal: ConstVal

    def fmt_debug(self) -> str:
        return f"const {fmt_const_val(self.literal)}"


Operand = Union[Consume, Constant]


# ---------- Rvalues ----------
class BinOp(Enum):
    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    REM = "Rem"
    BIT_XOR = "BitXor"
    BIT_AND = "BitAnd"
    BIT_OR = "BitOr"
    SHL = "Shl"
    SHR = "Shr"
    EQ = "Eq"
    LT = "Lt"
    LE = "Le"
    NE = "Ne"
    GE = "Ge"
    GT = "Gt"


class UnOp(Enum):
    NOT = "Not"
    NEG = "Neg"


@dataclass(frozen=True)
class Use(Debug):
    operand: Operand

    def fmt_debug(self) -> str:
        return self.operand.fmt_debug()


@dataclass(frozen=True)
class Ref(Debug):
    mutability: Mutability
    lvalue: Lvalue

    def fmt_debug(self) -> str:
        kind = "&mut " if self.mutability is Mutability.MUT else "&"
        return kind + self.lvalue.fmt_debug()


@dataclass(frozen=True)
class BinaryOp(Debug):
    op: BinOp
    left: Operand
    right: Operand

    def fmt_debug(self) -> str:
        return f"{self.op.value}({self.left.fmt_debug()}, {self.right.fmt_debug()})"


@dataclass(frozen=True)
class UnaryOp(Debug):
    op: UnOp
    operand: Operand

    def fmt_debug(self) -> str:
        return f"{self.op.value}({self.operand.fmt_debug()})"


@dataclass(frozen=True)
class Cast(Debug):
    operand: Operand
    ty: Ty

    def fmt_debug(self) -> str:
        return f"{self.operand.fmt_debug()} as {self.ty.fmt_debug()}"


@dataclass(frozen=True)
class Aggregate(Debug):
    operands: List[Operand]

    def fmt_debug(self) -> str:
        inner = ", ".join(op.fmt_debug() for op in self.operands)
        # one-element tuples keep their trailing comma
        if len(self.operands) == 1:
            inner += ","
        return f"({inner})"


Rvalue = Union[Use, Ref, BinaryOp, UnaryOp, Cast, Aggregate]


# ---------- Statements ----------
@dataclass(frozen=True)
class Statement(Debug):
    lvalue: Lvalue
    rvalue: Rvalue

    def fmt_debug(self) -> str:
        return f"{self.lvalue.fmt_debug()} = {self.rvalue.fmt_debug()}"


# ---------- Declarations ----------
@dataclass(frozen=True)
class ArgDecl:
    ty: Ty


@dataclass(frozen=True)
class VarDecl:
    mutability: Mutability
    name: str
    ty: Ty


@dataclass(frozen=True)
class TempDecl:
    ty: Ty


@dataclass(frozen=True)
class FnConverging:
    ty: Ty


@dataclass(frozen=True)
class FnDiverging:
    pass


FnOutput = Union[FnConverging, FnDiverging]
