#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/podmunge/pod/transforms.py
"""Visitor base class for rewriting Pod documents.

Subclass ``PodTransformer`` inside a munger's ``transform`` method when the
extracted Pod has to be rewritten node by node:

    >>> class Shout(PodTransformer):
    ...     def visit_text(self, node):
    ...         return Text(content=node.content.upper())
    >>>
    >>> document.documentation = Shout().transform(document.documentation)

"""

from __future__ import annotations

import copy

from podmunge.pod.nodes import Blank, Command, Nonpod, PodDocument, PodNode, Text


class PodTransformer:
    """Base class for transforming Pod nodes.

    Subclasses override visit_* methods to return a modified node, or None to
    remove it. The transformer builds a new document; the input is not changed.

    """

    def transform(self, node: PodNode) -> PodNode | None:
        """Transform a Pod node.

        Parameters
        ----------
        node : PodNode
            Node to transform

        Returns
        -------
        PodNode or None
            Transformed node or None to remove

        """
        return node.accept(self)

    def _transform_children(self, children: list[PodNode]) -> list[PodNode]:
        result = []
        for child in children:
            transformed = self.transform(child)
            if transformed is not None:
                result.append(transformed)
        return result

    def visit_document(self, node: PodDocument) -> PodDocument:
        """Transform a PodDocument node."""
        return PodDocument(children=self._transform_children(node.children), metadata=node.metadata.copy())

    def visit_command(self, node: Command) -> PodNode | None:
        """Transform a Command node."""
        return copy.copy(node)

    def visit_text(self, node: Text) -> PodNode | None:
        """Transform a Text node."""
        return copy.copy(node)

    def visit_blank(self, node: Blank) -> PodNode | None:
        """Transform a Blank node."""
        return copy.copy(node)

    def visit_nonpod(self, node: Nonpod) -> PodNode | None:
        """Transform a Nonpod node."""
        return copy.copy(node)

