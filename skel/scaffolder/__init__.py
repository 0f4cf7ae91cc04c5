"""skel scaffolder -- turns skeleton definitions into project trees.

Quick usage::

    from skel.scaffolder import load_definition, resolve, materialize
    from skel.templating import SubstitutionContext

    definition = load_definition("/home/me/.config/skel/skeletons/rust.toml")
    ctx = SubstitutionContext.for_project("demo", "/tmp/demo", "/home/me/.config/skel")
    tree = resolve(definition, ctx)
    materialize(tree, "/tmp/demo")
"""

from skel.scaffolder.build import run_build
from skel.scaffolder.loader import load_definition
from skel.scaffolder.materializer import create_tree, materialize, precheck, render_tree
from skel.scaffolder.models import ResolvedTree, SkeletonDefinition, TemplateEntry
from skel.scaffolder.resolver import resolve

__all__ = [
    "ResolvedTree",
    "SkeletonDefinition",
    "TemplateEntry",
    "create_tree",
    "load_definition",
    "materialize",
    "precheck",
    "render_tree",
    "resolve",
    "run_build",
]
