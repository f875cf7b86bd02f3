#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/tree_node.py - Snapshot graph of trees and blobs
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os
from enum import Enum
from typing import Dict, List, Optional

from .errors import MiniGitError
from .hash_utils import get_hash_from_bytes
from .object_files import TreeFile
from .translation_utils import _


class NodeType(Enum):
    TREE = "tree"
    BLOB = "blob"


class Node:
    """Named entry of a snapshot"""

    def __init__(self, name: str, node_type: NodeType, hash: Optional[str] = None):
        self.name = name
        self.type = node_type
        self.hash = hash


class BlobNode(Node):

    def __init__(self, name: str, hash: str):
        super().__init__(name, NodeType.BLOB, hash)


class TreeNode(Node):
    """
    Directory of a snapshot.

    Hashes are computed bottom-up by build_graph(); a tree's text lists its
    children sorted by name, one "<type> <hash> <name>" line each.
    """

    def __init__(self, name: str):
        super().__init__(name, NodeType.TREE)
        self.children: Dict[str, Node] = {}
        self.content = ""

    @staticmethod
    def create_root() -> "TreeNode":
        return TreeNode("")

    @staticmethod
    def from_blobs(blobs: Dict[str, str]) -> "TreeNode":
        """Builds and hashes a tree from a {path: blob hash} mapping"""
        root = TreeNode.create_root()
        for path, blob_hash in blobs.items():
            root.add_children(path.split("/"), blob_hash)
        root.build_graph()
        return root

    def get_blobs(self, name_prefix: str = "") -> Dict[str, str]:
        """Returns blob entries: {path in working directory: hash}"""
        result = {}
        for child_name, child in self.children.items():
            if child.type == NodeType.TREE:
                result.update(child.get_blobs(f"{name_prefix}{child_name}/"))
            else:
                result[f"{name_prefix}{child_name}"] = child.hash
        return result

    @staticmethod
    def load_tree(trees_dir: str, hash: str, name: str = "") -> "TreeNode":
        node = TreeNode(name)
        node.hash = hash

        tree_path = os.path.join(trees_dir, hash)
        try:
            with open(tree_path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            raise MiniGitError(_("Tree '{0}' does not exist").format(hash))
        except OSError as e:
            raise MiniGitError.from_os_error(e)

        for line in lines:
            child_type, child_hash, child_name = line.split(" ", 2)
            if child_type == NodeType.TREE.value:
                child = TreeNode.load_tree(trees_dir, child_hash, child_name)
            else:
                child = BlobNode(child_name, child_hash)
            node.children[child_name] = child

        node.content = "".join(f"{line}\n" for line in lines)
        return node

    def add_children(self, names: List[str], blob_hash: str, index: int = 0) -> None:
        if index == len(names) - 1:
            self.add_blob(names[index], blob_hash)
            return

        tree_name = names[index]
        child = self.children.get(tree_name)
        if child is None:
            child = TreeNode(tree_name)
            self.children[tree_name] = child
        elif child.type != NodeType.TREE:
            raise MiniGitError(
                _("Path conflict: '{0}' is tracked both as a file and a directory").format(
                    "/".join(names[:index + 1])
                )
            )

        child.add_children(names, blob_hash, index + 1)

    def add_blob(self, name: str, hash: str) -> None:
        if name not in self.children:
            self.children[name] = BlobNode(name, hash)

    def build_graph(self) -> None:
        lines = []
        for child_name in sorted(self.children):
            child = self.children[child_name]
            if child.type == NodeType.TREE:
                child.build_graph()
            lines.append(f"{child.type.value} {child.hash} {child_name}\n")

        self.content = "".join(lines)
        self.hash = get_hash_from_bytes(self.content.encode('utf-8'))

    def save_graph(self, trees_dir: str) -> None:
        # Blob nodes are stored at add time, only trees are written here
        for child in self.children.values():
            if child.type == NodeType.TREE:
                child.save_graph(trees_dir)

        TreeFile(trees_dir, self.content.encode('utf-8')).save()
