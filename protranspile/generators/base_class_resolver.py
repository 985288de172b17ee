"""Base-class resolver for streaming classes

A streaming class either extends the asynchronous variant of a REST class
(parent name contains the REST marker, e.g. ``binanceRest``) or a named
streaming base class directly. The branch is decided once, in ``resolve``;
declaration and import builders only look at the resolved kind.
"""

from typing import List

from protranspile.core.config import ParentPolicy
from protranspile.core.errors import HierarchyError
from protranspile.core.models import BaseKind, ResolvedBase, Target
from protranspile.core.naming import NamingScheme


class BaseClassResolver:
    """Maps a declared parent name to per-target inheritance and imports

    Usage:
        resolver = BaseClassResolver(root_package="ccxt")
        resolved = resolver.resolve("binanceRest")
        resolver.declaration(Target.PYTHON, "binance", resolved)
        # 'class binance(ccxt.async_support.binance):'
        resolver.imports(Target.PYTHON, resolved)
        # ['import ccxt.async_support']
    """

    def __init__(self, root_package: str = "ccxt", rest_marker: str = "Rest",
                 policy: ParentPolicy = ParentPolicy.PERMISSIVE) -> None:
        self.root_package = root_package
        self.rest_marker = rest_marker
        self.policy = policy

    def resolve(self, parent_name: str, class_name: str = "") -> ResolvedBase:
        """Decide the inheritance branch for a parent name

        Args:
            parent_name: Parent as declared in the canonical source
            class_name: Declaring class, used in error messages

        Returns:
            ResolvedBase tagged REST_DERIVED or DIRECT

        Raises:
            HierarchyError: Under the strict policy, if a marker-free parent
                name is not a valid identifier
        """
        stripped = NamingScheme.strip_marker(parent_name, self.rest_marker)
        if stripped is not None:
            return ResolvedBase(BaseKind.REST_DERIVED, stripped, parent_name)

        if self.policy == ParentPolicy.STRICT and not NamingScheme.is_valid_identifier(parent_name):
            raise HierarchyError(class_name, parent_name)
        return ResolvedBase(BaseKind.DIRECT, parent_name, parent_name)

    def declaration(self, target: Target, class_name: str, resolved: ResolvedBase) -> str:
        """Class declaration line for target"""
        if target == Target.PYTHON:
            if resolved.is_rest_derived:
                parent = f"{self.root_package}.async_support.{resolved.base_name}"
            else:
                parent = resolved.base_name
            return f"class {class_name}({parent}):"

        if target == Target.PHP:
            namespace = "async" if resolved.is_rest_derived else "pro"
            return f"class {class_name} extends \\{self.root_package}\\{namespace}\\{resolved.base_name} {{"

        raise ValueError(f"No class declarations are generated for {target.name}")

    def imports(self, target: Target, resolved: ResolvedBase) -> List[str]:
        """Import statements that make the parent reference resolvable"""
        if target == Target.PYTHON:
            if resolved.is_rest_derived:
                return [f"import {self.root_package}.async_support"]
            return [f"from {self.root_package}.pro.{resolved.base_name} import {resolved.base_name}"]

        # PHP parents are fully qualified in the declaration
        return []
