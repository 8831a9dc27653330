# mirviz/viz_mir.py
import logging
from typing import Any, Callable, Iterable, List, Optional, TextIO, Tuple

from graphviz import Digraph, nohtml

from mircore.cfg import BasicBlock, Mir, fmt_head, fmt_return_ty, successor_edges
from mircore.ir import Arg, Mutability, Temp, Var
from .escape import TEXT_BREAK, escape, escape_html, escape_text

LOG = logging.getLogger(__name__)

FONTNAME = "monospace"
NODE_PREFIX = "bb"
GRAPH_PREFIX = "Mir_"

RowFn = Callable[[BasicBlock], str]


def node(block: BasicBlock) -> str:
    return f"{NODE_PREFIX}{block}"


def node_label(block: BasicBlock, mir: Mir, num_cols: int = 1,
               before: Optional[RowFn] = None, after: Optional[RowFn] = None) -> str:
    """Render one basic block as a Graphviz HTML table, with escaping done.

    `before` and `after` may return extra `<tr>` rows (e.g. dataflow facts)
    that go above the statements and below the terminator. `num_cols` must
    match the widest of those rows.
    """
    data = mir.basic_block_data(block)
    rows = ['<table border="0" cellborder="1" cellspacing="0">']

    # block number at the top
    rows.append(f'<tr><td bgcolor="gray" align="center" colspan="{num_cols}">{block}</td></tr>')

    if before is not None:
        rows.append(before(block))

    if data.statements:
        body = "".join(f"{escape(stmt)}<br/>" for stmt in data.statements)
        rows.append(f'<tr><td align="left" balign="left">{body}</td></tr>')

    # successors are shown as edge labels, not here
    rows.append(f'<tr><td align="left">{escape_html(fmt_head(data.terminator))}</td></tr>')

    if after is not None:
        rows.append(after(block))

    rows.append("</table>")
    return "".join(rows)


def edges(source: BasicBlock, mir: Mir) -> List[Tuple[str, str]]:
    succs, labels = successor_edges(mir.basic_block_data(source).terminator)
    return [(node(target), label) for target, label in zip(succs, labels, strict=True)]


def graph_label(nodeid: Any, mir: Mir, path_to_string: Callable[[Any], str] = str) -> str:
    """Caption shown below the graph: the fn signature, then every variable
    and temporary with its type."""
    args = ", ".join(f"{Arg(i)}: {escape_text(a.ty)}" for i, a in enumerate(mir.arg_decls))
    parts = [f"fn {escape_text(path_to_string(nodeid))}({args}) -&gt; "
             f"{escape_text(fmt_return_ty(mir.return_ty))}{TEXT_BREAK}"]

    for i, var in enumerate(mir.var_decls):
        mut = "mut " if var.mutability is Mutability.MUT else ""
        parts.append(f"let {mut}{Var(i)}: {escape_text(var.ty)}; // {escape_text(var.name)}{TEXT_BREAK}")

    for i, temp in enumerate(mir.temp_decls):
        parts.append(f"let mut {Temp(i)}: {escape_text(temp.ty)};{TEXT_BREAK}")

    return "".join(parts)


def mir_graphviz(nodeid: Any, mir: Mir, path_to_string: Callable[[Any], str] = str) -> Digraph:
    font = {"fontname": FONTNAME}
    g = Digraph(f"{GRAPH_PREFIX}{nodeid}", graph_attr=font, node_attr=font, edge_attr=font)
    g.attr(label=f"<{graph_label(nodeid, mir, path_to_string)}>")
    for block in mir.all_basic_blocks():
        g.node(node(block), label=f"<{node_label(block, mir)}>", shape="none")
    for source in mir.all_basic_blocks():
        for target, label in edges(source, mir):
            g.edge(node(source), target, label=nohtml(label))
    return g


def write_mir_graphviz(graphs: Iterable[Tuple[Any, Mir]], w: TextIO,
                       path_to_string: Callable[[Any], str] = str) -> None:
    """Write one DOT digraph per (nodeid, mir) pair to `w`, in order.

    A failing write stops the whole run; graphs already written stay in `w`.
    """
    for nodeid, mir in graphs:
        g = mir_graphviz(nodeid, mir, path_to_string)
        LOG.debug("writing graphviz for %s (%d blocks)", nodeid, len(mir.basic_blocks))
        try:
            w.write(g.source)
            flush = getattr(w, "flush", None)
            if flush is not None:
                flush()
        except OSError:
            LOG.error("failed writing graphviz for %s", nodeid)
            raise
