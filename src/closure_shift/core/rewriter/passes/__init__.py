"""
Transformation Passes Package.

The order returned by ``default_passes`` matters: classes must be registered
before members, inheritance and singletons can find them, and references are
rewritten only once every local name is known.
"""

from typing import List

from closure_shift.core.rewriter.interface import RewriterPass
from closure_shift.core.rewriter.passes.modules import ModuleDeclarationPass
from closure_shift.core.rewriter.passes.classes import ClassExtractionPass
from closure_shift.core.rewriter.passes.members import MemberMigrationPass
from closure_shift.core.rewriter.passes.namespaces import NamespaceMemberPass
from closure_shift.core.rewriter.passes.inheritance import InheritancePass
from closure_shift.core.rewriter.passes.singleton import SingletonPass
from closure_shift.core.rewriter.passes.references import ReferenceRewritePass
from closure_shift.core.rewriter.passes.exports import ExportPass


def default_passes() -> List[RewriterPass]:
  """Fresh instances of the class migration passes, in execution order."""
  return [
    ModuleDeclarationPass(),
    ClassExtractionPass(),
    MemberMigrationPass(),
    NamespaceMemberPass(),
    InheritancePass(),
    SingletonPass(),
    ReferenceRewritePass(),
    ExportPass(),
  ]


__all__ = [
  "ModuleDeclarationPass",
  "ClassExtractionPass",
  "MemberMigrationPass",
  "NamespaceMemberPass",
  "InheritancePass",
  "SingletonPass",
  "ReferenceRewritePass",
  "ExportPass",
  "default_passes",
]
