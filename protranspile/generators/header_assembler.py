"""Header assembler for generated files

Composes the file header of every generated class and test file:

    <pragma>

    <comment> PLEASE DO NOT EDIT THIS FILE, IT IS GENERATED AND WILL BE OVERWRITTEN:
    <comment> https://...

    <namespace>

    <fixed imports>
    <imports>
"""

from typing import Dict, List, Optional, Sequence, Tuple

from protranspile.core.config import DEFAULT_NOTICE
from protranspile.core.models import Target, TargetProfile, default_profiles


class HeaderAssembler:
    """Builds headers as a pure function of (target, imports)"""

    def __init__(self, profiles: Optional[Dict[Target, TargetProfile]] = None,
                 notice: Tuple[str, str] = DEFAULT_NOTICE,
                 root_package: str = "ccxt") -> None:
        """Initialize header assembler

        Args:
            profiles: Layout profile per generated target
                      (default: Python and PHP profiles for root_package)
            notice: The two generated-file notice lines, without comment prefix
            root_package: Root package used to build the default profiles
        """
        self.profiles = profiles if profiles is not None else default_profiles(root_package)
        self.notice = notice

    def profile(self, target: Target) -> TargetProfile:
        try:
            return self.profiles[target]
        except KeyError:
            raise ValueError(f"No header profile for {target.name}") from None

    def notice_lines(self, target: Target) -> List[str]:
        prefix = self.profile(target).comment_prefix
        return [f"{prefix} {line}" for line in self.notice]

    def assemble(self, target: Target, imports: Sequence[str] = ()) -> List[str]:
        """Generate the header block for target

        Args:
            target: Generated target
            imports: Ordered import statements (base class, then helpers)

        Returns:
            Header lines, without a trailing blank line
        """
        profile = self.profile(target)
        lines: List[str] = []

        if profile.pragma:
            lines.extend(profile.pragma)
            lines.append("")

        lines.extend(self.notice_lines(target))
        lines.append("")

        if profile.namespace:
            lines.append(profile.namespace)
            lines.append("")

        lines.extend(profile.fixed_imports)
        for statement in imports:
            if statement not in lines:
                lines.append(statement)

        if lines and lines[-1] == "":
            lines.pop()
        return lines
