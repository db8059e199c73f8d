"""Build the documentation tree for a workspace.

Each source file is run through the passes in ``mooncats.passes.PASSES``
to produce a MetaFile. MetaFiles are then nested by path: ``foo/bar.lua``
becomes a child of ``foo.lua``.
"""

import logging
from typing import Iterable

from mooncats.domain.items import MetaFile
from mooncats.location import FileUri
from mooncats.passes import PASSES
from mooncats.schema import Definition
from mooncats.workspace import Workspace

logger = logging.getLogger(__name__)


def document_folder(root: FileUri, definitions: Iterable[Definition]) -> list[MetaFile]:
    """Load definitions into a workspace rooted at ``root`` and build its tree."""
    workspace = Workspace(root)
    workspace.load(definitions)
    logger.info("Loaded %d files below %s", len(workspace), root)
    return build_docs(workspace)


def build_docs(workspace: Workspace) -> list[MetaFile]:
    """Run all passes over every workspace file and nest the results.

    Returns:
        The root MetaFiles of the doc tree, in order.

    Raises:
        MoonCatsError: On the first inconsistent definition.
    """
    meta_files: list[MetaFile] = []

    for source_file in workspace:
        meta_file = MetaFile(source_file.uri)
        for doc_pass in PASSES:
            doc_pass(meta_file, source_file)
        logger.debug("Built %s with %d items", source_file.uri, len(meta_file.items))
        meta_files.append(meta_file)

    return build_tree(meta_files, workspace.root)


def build_tree(meta_files: Iterable[MetaFile], root: FileUri) -> list[MetaFile]:
    """Nest MetaFiles under the file named after their parent directory.

    Files are taken in (depth below root, file name) order. A file directly
    inside the root becomes a tree root. Any other file is attached to the
    first node, in depth-first order, that sits one level higher and whose
    stem equals the file's directory name. Files without such a node are
    left out of the tree.
    """
    ordered = sorted(meta_files, key=lambda f: (f.uri.depth_from(root), f.uri.name))
    tree: list[MetaFile] = []

    for meta_file in ordered:
        depth = meta_file.uri.depth_from(root)
        if depth == 1:
            tree.append(meta_file)
            continue

        parent = _find_parent(tree, meta_file, root)
        if parent is None:
            logger.debug("Dropping %s: no parent file for its directory", meta_file.uri)
            continue
        parent.children.append(meta_file)

    return tree


def _find_parent(tree: list[MetaFile], meta_file: MetaFile, root: FileUri) -> MetaFile | None:
    parent_depth = meta_file.uri.depth_from(root) - 1
    parent_name = meta_file.uri.parent_name

    for node in tree:
        for candidate in node.walk():
            if candidate.uri.depth_from(root) == parent_depth and candidate.uri.stem == parent_name:
                return candidate
    return None
