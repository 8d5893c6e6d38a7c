import dataclasses
import json
import re
from collections import Counter
from typing import List, Optional, Sequence

from tree_sitter import Node

from appexplorer.spec import AnnotationRecord, CrossReference, format_location
from .context import ScannerContext
from .jsdoc import DocComment, DocTag, attached_comment, parse_doc_comment
from .syntax import is_attachable
from .traversal import DebugSink, walk

PERMALINK = re.compile(r"^https?://\S+$")


def _tag_location(context: ScannerContext, tag: DocTag) -> str:
    return format_location(context.session.path, tag.start_line, tag.end_line)


def _marker_for(tag: DocTag, markers: Sequence[str]) -> Optional[str]:
    for marker in markers:
        if tag.name.lower() == marker.lower():
            return marker.upper()
    return None


def _emit(declaration: Node, doc: DocComment, context: ScannerContext) -> None:
    config = context.config
    session = context.session

    # A cross-reference only counts alongside a main comment
    xref_tag = doc.find_tag(config.cross_reference_tag) if doc.main else None
    pending = []
    for tag in doc.tags:
        marker = _marker_for(tag, config.pending_work_markers)
        if marker is not None:
            pending.append((tag, marker))
    if xref_tag is None and not pending:
        return

    # Raises for documented shapes the identity rules do not cover
    parent_id = context.identify(declaration)

    # 1. Cross-reference: one record per segment of the main comment
    if xref_tag is not None:
        argument = xref_tag.argument
        cross_reference = CrossReference(
            text=argument,
            location=_tag_location(context, xref_tag),
            parent_node_id=parent_id,
            permalink=argument if PERMALINK.match(argument) else None,
        )
        for segment in doc.segments:
            context.data.annotate(
                AnnotationRecord(
                    location=session.location(doc.node),
                    text=f"@{config.cross_reference_tag} {segment}",
                    parent_node_id=parent_id,
                    cross_reference=cross_reference,
                )
            )

    # 2. Pending work: one record per segment of each marker tag
    for tag, marker in pending:
        for segment in tag.segments:
            context.data.annotate(
                AnnotationRecord(
                    location=_tag_location(context, tag),
                    text=f"@{marker} {segment}",
                    parent_node_id=parent_id,
                )
            )


def detect_annotations(node: Node, context: ScannerContext) -> None:
    """
    Extracts annotations from doc comments anywhere under a top-level
    statement: on declarations, on class, interface, enum and object
    members, and on plain statements.
    """
    source = context.session.source

    def on_visit(n: Node, debug: DebugSink, ancestors: Sequence[Node]) -> None:
        if not is_attachable(n):
            return None
        comment = attached_comment(n, source)
        if comment is not None:
            _emit(n, parse_doc_comment(comment, source), context)
        return None

    walk(node, on_visit, context.debug)


def _content_key(record: AnnotationRecord) -> str:
    return json.dumps(record.content_shape(), sort_keys=True)


def assign_sequence_keys(records: Sequence[AnnotationRecord]) -> List[AnnotationRecord]:
    """
    Numbers repeated annotations in collection order.

    The first record with a given content keeps `key=None`; the n-th repeat
    after it gets `key=n`. Relative order is unchanged.
    """
    seen: Counter = Counter()
    keyed: List[AnnotationRecord] = []
    for record in records:
        content = _content_key(record)
        count = seen[content]
        seen[content] += 1
        keyed.append(dataclasses.replace(record, key=count if count > 0 else None))
    return keyed
