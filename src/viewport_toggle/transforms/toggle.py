"""Viewport-to-container toggle: the main stylesheet transform.

Every rule that depends on the viewport (viewport units or
``position: fixed``) is forked in two:

- the original, scoped to viewport mode with
  ``<container_el>:not([<modifier_attr>])``;
- a container variant right after it, scoped to preview mode with
  ``<container_el>[<modifier_attr>]``, with viewport units converted to
  container units and fixed positioning turned sticky.

Every ``@media`` block gets a sibling ``@container`` block holding converted
copies of its rules, while the rules of the original block are scoped to
viewport mode. Toggling the attribute on the container element therefore
switches the page between real breakpoints and container breakpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from viewport_toggle.config import ToggleOptions
from viewport_toggle.convert.media import MediaTranslator
from viewport_toggle.convert.rules import RuleProcessor
from viewport_toggle.convert.selectors import add_guard, has_guard, update_body_selectors
from viewport_toggle.convert.units import UnitConverter
from viewport_toggle.debug import DebugReporter, Stats
from viewport_toggle.model.nodes import AtRule, Declaration, Node, Root, Rule

logger = logging.getLogger(__name__)

_QUERY_AT_RULES = ("media", "container")


def _is_keyframes(node: Node | None) -> bool:
    return isinstance(node, AtRule) and node.name.endswith("keyframes")


def _inside_query(node: Node) -> bool:
    parent = node.parent
    while parent is not None:
        if isinstance(parent, AtRule) and parent.name in _QUERY_AT_RULES:
            return True
        parent = parent.parent
    return False


def _rules_in(node: Node) -> list[Rule]:
    """*node* itself if it is a rule, else the rules nested in it."""
    if isinstance(node, Rule):
        return [node]
    rules: list[Rule] = []
    if isinstance(node, AtRule):
        node.walk_rules(rules.append)
    return [rule for rule in rules if not _is_keyframes(rule.parent)]


@dataclass
class _Group:
    """Nodes of one media block (or nested media block) and its conditions."""

    conditions: list[str]
    nodes: list[Node] = field(default_factory=list)


class TogglePass:
    """State for a single traversal of one stylesheet.

    Holds the processed-node set and the container-context flag so that
    separate invocations never share state.
    """

    def __init__(self, options: ToggleOptions) -> None:
        self.options = options
        self.reporter = DebugReporter(options.debug, options.debug_filter)
        converter = UnitConverter(options.units, options.typography_units)
        self.rules = RuleProcessor(converter, self.reporter)
        self.media = MediaTranslator(options.transform, self.reporter)
        self.container_guard = options.conditional_selector
        self.viewport_guard = options.conditional_not_selector
        self.processed: set[Node] = set()
        self.has_added_container_context = False

    @property
    def stats(self) -> Stats:
        return self.reporter.stats

    def run(self, root: Root) -> Stats:
        self.once(root)
        root.walk(self.visit)
        self.once_exit()
        return self.stats

    # ---- lifecycle ----

    def once(self, root: Root) -> None:
        """Prepend the container context rule if anything is fixed."""
        if self.has_added_container_context:
            return
        if not self.rules.has_fixed_position(root):
            return
        # Output of an earlier pass already carries the context rule.
        for node in root.nodes:
            if isinstance(node, Rule) and node.selector == self.container_guard:
                self.has_added_container_context = True
                return
        context = Rule(
            self.container_guard,
            [Declaration("position", "relative"), Declaration("contain", "layout")],
            source=root.source,
        )
        root.prepend(context)
        self.processed.add(context)
        self.has_added_container_context = True
        self.reporter.log("Added container context rule", root)

    def once_exit(self) -> None:
        self.reporter.print_summary()

    def visit(self, node: Node) -> None:
        if isinstance(node, Rule):
            self.visit_rule(node)
        elif isinstance(node, AtRule) and node.name == "media":
            self.visit_media(node)

    # ---- rules ----

    def visit_rule(self, rule: Rule) -> None:
        if rule in self.processed:
            return
        # Rules in media/container blocks are handled by visit_media.
        if _inside_query(rule) or _is_keyframes(rule.parent):
            return
        if not has_guard(rule.selector, (self.viewport_guard, self.container_guard)):
            self.fork_rule(rule)
        self.processed.add(rule)

    def fork_rule(self, rule: Rule) -> None:
        """Scope *rule* to viewport mode and add its container variant."""
        if not self.rules.needs_processing(rule):
            # Body-level rules must keep applying to the container element
            # in both modes.
            rule.selector = update_body_selectors(
                rule.selector, [self.viewport_guard, self.container_guard]
            )
            return

        self.reporter.record_rule_processed()
        self.reporter.log(f"Processing rule: {rule.selector}", rule)
        container_rule = rule.clone(
            selector=add_guard(rule.selector, self.container_guard)
        )
        rule.selector = add_guard(rule.selector, self.viewport_guard)
        self._convert(container_rule)
        rule.after(container_rule)
        self.processed.add(container_rule)

    def _convert(self, rule: Rule) -> None:
        result = self.rules.process_declarations(rule, is_container=True)
        if result.has_fixed_position:
            self.reporter.record_fixed_position()

    # ---- media ----

    def visit_media(self, at_rule: AtRule) -> None:
        if at_rule in self.processed:
            return
        self.processed.add(at_rule)

        already_guarded = not at_rule.walk_rules(
            lambda rule: False if self.viewport_guard in rule.selector else None
        )
        if already_guarded:
            return

        conditions = self.media.get_conditions(at_rule.params)
        if conditions is None:
            self.reporter.log(f"Skipping media query: @media {at_rule.params}", at_rule)
            at_rule.walk_at_rules(self.processed.add, name="media")
            return

        self.reporter.record_media_processed()
        self.reporter.log(f"Processing media query: @media {at_rule.params}", at_rule)

        groups: list[_Group] = []
        self._collect(at_rule, conditions, groups)

        containers: list[AtRule] = []
        for group in groups:
            if not group.nodes:
                continue
            if group.conditions:
                containers.append(self._container_block(group))
                for node in group.nodes:
                    for rule in _rules_in(node):
                        self._guard(rule)
            else:
                # Media types only: no container condition to express, so
                # fork the rules where they are.
                for node in group.nodes:
                    for rule in _rules_in(node):
                        if rule not in self.processed:
                            self.fork_rule(rule)
                            self.processed.add(rule)

        if containers:
            at_rule.after(*containers)
            self.processed.update(containers)

    def _collect(self, block: AtRule, conditions: list[str], groups: list[_Group]) -> None:
        group = _Group(conditions)
        groups.append(group)
        for child in list(block.nodes):
            if isinstance(child, AtRule) and child.name == "media":
                self.processed.add(child)
                nested = self.media.get_conditions(child.params)
                if nested is None:
                    child.walk_at_rules(self.processed.add, name="media")
                    continue
                self._collect(child, self.media.combine(conditions, nested), groups)
            elif isinstance(child, Rule) or (
                isinstance(child, AtRule) and not _is_keyframes(child) and _rules_in(child)
            ):
                group.nodes.append(child)

    def _container_block(self, group: _Group) -> AtRule:
        container = AtRule("container", ", ".join(group.conditions))
        for node in group.nodes:
            clone = node.clone()
            for rule in _rules_in(clone):
                rule.selector = update_body_selectors(rule.selector, self.container_guard)
                self._convert(rule)
                self.processed.add(rule)
            container.append(clone)
        return container

    def _guard(self, rule: Rule) -> None:
        if not has_guard(rule.selector, (self.viewport_guard, self.container_guard)):
            rule.selector = add_guard(rule.selector, self.viewport_guard)
        self.processed.add(rule)


class ViewportToContainerToggle:
    """Add container-query variants of viewport-dependent styles.

    Options are resolved once; every :meth:`apply` runs an independent
    :class:`TogglePass`, so one instance can be reused across stylesheets.
    """

    def __init__(self, options: ToggleOptions | None = None, **overrides: object) -> None:
        if options is not None and overrides:
            raise ValueError("Pass either a ToggleOptions instance or keyword options")
        self.options = options or ToggleOptions.resolve(**overrides)

    def run(self, root: Root) -> Stats:
        """Transform *root* in place and return the statistics of the pass."""
        logger.debug("Running viewport toggle on %s", root.source or "<string>")
        return TogglePass(self.options).run(root)

    def apply(self, root: Root) -> Root:
        self.run(root)
        return root
