"""
Type compatibility checks and upward type propagation.

An argument's calculated type is the union of its children's types. When it no
longer satisfies the argument's allowed type, the owning node is flagged and
propagation stops there. Otherwise, for arguments that influence their owner's
output type, the new type is written onto the owning function (and propagation
continues into the function's own argument) or onto the owning action's output
variable (and propagation continues from every reference to that variable).
"""

import logging
from functools import reduce

from proctree.content.nodes import (
    Action,
    Argument,
    Content,
    Function,
    Reference,
    Value,
    Variable,
)
from proctree.core.types import VOID_TYPE, ContentKey, TypeUnion
from proctree.exceptions import ReferencePathError
from proctree.specification.models import CallableSpec
from proctree.typesystem.operations import matches_requirement, type_union
from proctree.validation.context import TreeContext
from proctree.validation.errors import (
    ErrorCode,
    ensure_error,
    remove_errors,
    unsatisfied_input_type_mismatch,
)
from proctree.validation.references import resolve_expression_info, revalidate_reference

logger = logging.getLogger(__name__)


def _callable_spec(context: TreeContext, owner: Action | Function) -> CallableSpec | None:
    catalog = (
        context.engine_spec.actions
        if isinstance(owner, Action)
        else context.engine_spec.functions
    )
    return catalog.get(owner.name)


def _declared_output(context: TreeContext, owner: Action | Function) -> tuple[TypeUnion, bool]:
    spec = _callable_spec(context, owner)
    if spec is None or spec.output is None:
        return VOID_TYPE, False
    return spec.output.type, spec.output.multi


def propagate_type_changes(context: TreeContext, expression_key: ContentKey) -> None:
    """
    Re-evaluate the argument holding an expression after the expression changed.

    Params:
        context: Editor state (or equivalent)
        expression_key: A Value, Function or Reference whose type may have changed
    """
    expression = context.store.resolve(expression_key, Value, Function, Reference)
    evaluate_argument(context, expression.parent_key)


def evaluate_argument(context: TreeContext, argument_key: ContentKey) -> None:
    """
    Recompute an argument's calculated type and push the result to its owner.

    Params:
        context: Editor state (or equivalent)
        argument_key: The argument to evaluate
    """
    store = context.store
    argument = store.resolve(argument_key, Argument)
    children = [store.resolve(key, Value, Function, Reference) for key in argument.child_keys]
    calculated = reduce(type_union, (child.type for child in children), VOID_TYPE)
    children_multi = any(child.multi for child in children)
    argument.calculated_type = calculated

    owner = store.resolve(argument.parent_key)
    satisfied = matches_requirement(calculated, argument.allowed_type, context.type_system)
    if not satisfied or (children_multi and not argument.allow_multi):
        ensure_error(
            owner.errors,
            unsatisfied_input_type_mismatch(argument.key, argument.declared_type, calculated),
            "argument",
        )
        logger.debug("Argument '%s' no longer satisfies its declared type", argument.key)
        return

    remove_errors(owner.errors, ErrorCode.UNSATISFIED_INPUT_TYPE_MISMATCH, argument=argument.key)
    if argument.propagate_type_changes and isinstance(owner, (Action, Function)):
        declared_type, declared_multi = _declared_output(context, owner)
        _assign_owner_type(
            context,
            owner,
            calculated or declared_type,
            declared_multi or children_multi,
        )


def _assign_owner_type(
    context: TreeContext, owner: Action | Function, new_type: TypeUnion, multi: bool
) -> None:
    if owner.type == new_type and owner.multi == multi:
        return
    owner.type = new_type
    owner.multi = multi
    logger.debug("Propagated type [%s] to '%s'", ", ".join(new_type), owner.key)

    match owner:
        case Function():
            evaluate_argument(context, owner.parent_key)
        case Action(variable_key=None):
            pass
        case Action():
            variable = context.store.resolve(owner.variable_key, Variable)
            variable.type = new_type
            variable.multi = multi
            for reference_key in list(variable.reference_keys):
                refresh_reference(context, reference_key)
                evaluate_argument(context, context.store.resolve(reference_key).parent_key)


def refresh_reference(context: TreeContext, reference_key: ContentKey) -> None:
    """
    Recompute a reference's type from its variable and path, then revalidate it.

    An unresolvable path keeps the previous type and leaves an INVALID_REFERENCE
    error on the reference.
    """
    store = context.store
    reference = store.resolve(reference_key, Reference)
    variable = store.resolve(reference.variable_key, Variable)
    try:
        info = resolve_expression_info(variable, reference.path, context.engine_spec)
    except ReferencePathError as e:
        logger.warning("Could not re-resolve reference '%s': %s", reference_key, e)
    else:
        reference.type = info.type
        reference.multi = info.multi
        reference.optional = info.optional
    revalidate_reference(context, reference_key)


def evaluate_subtree(context: TreeContext, key: ContentKey) -> None:
    """Evaluate every argument in a subtree, innermost first."""
    arguments: list[Content] = [
        content
        for content in context.store.walk_down(key, post_order=True)
        if isinstance(content, Argument)
    ]
    for argument in arguments:
        evaluate_argument(context, argument.key)
