"""
Configuration document import.

Builds content nodes from configuration documents. Each construct routine
allocates its node, stores it, then constructs and links its children, so every
child already knows its parent's key. References address their variables by
position and may point anywhere in the document, so they are bound once the
surrounding structure exists. ``finish`` binds them, evaluates everything that
was imported, and only then settles reference paths, which may run through types
that evaluation propagated.
"""

import logging

from inflection import titleize, underscore

from proctree.config.models import (
    ActionConfig,
    BlockConfig,
    ConditionalConfig,
    ExecutableConfig,
    ExpressionConfig,
    FunctionConfig,
    ProcessConfig,
    ReferenceConfig,
    ValueConfig,
    VariableConfig,
)
from proctree.content.coordinates import find_executable
from proctree.content.nodes import (
    Action,
    Argument,
    Block,
    Control,
    ControlType,
    Function,
    Process,
    Reference,
    Value,
    Variable,
)
from proctree.core.types import (
    CONDITIONAL_CONDITION_PROP,
    PROCESS_RETURN_PROP,
    VOID_TYPE,
    ContentKey,
    TypeUnion,
)
from proctree.editor.availability import refresh_availability
from proctree.editor.state import EditorState
from proctree.exceptions import ConfigurationDocumentError, ReferencePathError
from proctree.specification.models import ExpressionSpec, InputSpec
from proctree.typesystem.operations import expand_type, type_equals
from proctree.validation.propagation import (
    evaluate_subtree,
    propagate_type_changes,
    refresh_reference,
)
from proctree.validation.references import resolve_expression_info
from proctree.validation.values import validate_value

logger = logging.getLogger(__name__)


def default_value_type(state: EditorState, declared_type: TypeUnion) -> TypeUnion:
    """Type given to new literals: the declared type, with "any object" shown as a string."""
    if type_equals(declared_type, (state.settings.object_type_id,)):
        return (state.settings.string_type_id,)
    return declared_type


class ContentImporter:
    """
    Constructs content nodes for one editing operation.

    Params:
        state: Editor state whose store receives the nodes
    """

    def __init__(self, state: EditorState):
        self.state = state
        self.store = state.store
        self.imported_roots: list[ContentKey] = []
        self._pending_references: list[tuple[Reference, ReferenceConfig]] = []
        self._bound_references: list[Reference] = []
        self._first_index = self.store.count

    def import_process(self, config: ProcessConfig) -> Process:
        spec = self.state.engine_spec.get_process(config.name)
        output_type, output_multi = (
            (spec.output.type, spec.output.multi) if spec.output else (VOID_TYPE, False)
        )
        process = self.store.add(
            Process(
                key=self.store.next_key(),
                name=config.name,
                type=output_type,
                multi=output_multi,
                external_id=config.external_id,
            )
        )
        self.store.root_key = process.key

        for name, variable_spec in spec.inputs.items():
            variable = self.store.add(
                Variable(
                    key=self.store.next_key(),
                    parent_key=process.key,
                    type=variable_spec.type,
                    multi=variable_spec.multi,
                    optional=variable_spec.optional,
                    title=variable_spec.title or titleize(underscore(name)),
                    description=variable_spec.description,
                    initial=True,
                    base_path=name,
                )
            )
            process.input_variable_keys.append(variable.key)

        process.root_block_key = self.import_block(config.root_block, process.key).key

        if spec.output is not None:
            expressions = config.return_expression or [ValueConfig()]
            argument = self.import_argument(
                PROCESS_RETURN_PROP, expressions, process.key, spec.output
            )
            process.child_key_map[PROCESS_RETURN_PROP] = argument.key
        elif config.return_expression:
            raise ConfigurationDocumentError(
                f"Process '{config.name}' declares no output but has a return expression"
            )

        self.imported_roots.append(process.key)
        return process

    def import_block(self, config: BlockConfig, parent_key: ContentKey) -> Block:
        block = self.store.add(Block(key=self.store.next_key(), parent_key=parent_key))
        for executable_config in config.executables:
            block.child_keys.append(self.import_executable(executable_config, block.key).key)
        return block

    def import_executable(
        self, config: ExecutableConfig, parent_key: ContentKey
    ) -> Action | Control:
        match config:
            case ActionConfig():
                return self.import_action(config, parent_key)
            case ConditionalConfig():
                return self.import_conditional(config, parent_key)
            case _:
                raise ConfigurationDocumentError(
                    f"Unsupported executable: {type(config).__name__}"
                )

    def import_action(self, config: ActionConfig, parent_key: ContentKey) -> Action:
        spec = self.state.engine_spec.get_action(config.name)
        output_type, output_multi = (
            (spec.output.type, spec.output.multi) if spec.output else (VOID_TYPE, False)
        )
        action = self.store.add(
            Action(
                key=self.store.next_key(),
                parent_key=parent_key,
                name=config.name,
                type=default_value_type(self.state, output_type),
                multi=output_multi,
            )
        )
        self._import_arguments(action, config.arguments, spec.inputs, f"action '{config.name}'")
        if action.type != VOID_TYPE:
            variable = self.import_variable(config.output, action)
            action.variable_key = variable.key
        return action

    def import_conditional(self, config: ConditionalConfig, parent_key: ContentKey) -> Control:
        control = self.store.add(
            Control(
                key=self.store.next_key(),
                parent_key=parent_key,
                control_type=ControlType(config.control_type),
            )
        )
        condition_spec = self.state.conditional_spec.inputs[CONDITIONAL_CONDITION_PROP]
        argument = self.import_argument(
            CONDITIONAL_CONDITION_PROP, [config.condition], control.key, condition_spec
        )
        control.child_key_map[CONDITIONAL_CONDITION_PROP] = argument.key
        for block_config in config.blocks:
            control.child_keys.append(self.import_block(block_config, control.key).key)
        return control

    def import_variable(self, config: VariableConfig | None, action: Action) -> Variable:
        return self.store.add(
            Variable(
                key=self.store.next_key(),
                parent_key=action.key,
                type=action.type,
                multi=action.multi,
                title=config.title if config else None,
                description=config.description if config else None,
            )
        )

    def _import_arguments(
        self,
        owner: Action | Function,
        arguments: dict[str, list[ExpressionConfig]],
        inputs: dict[str, InputSpec],
        location: str,
    ) -> None:
        unknown = set(arguments) - set(inputs)
        if unknown:
            raise ConfigurationDocumentError(
                f"Unknown arguments: {', '.join(sorted(unknown))}", location
            )
        for name, input_spec in inputs.items():
            expressions = arguments.get(name)
            if expressions is None:
                expressions = [ValueConfig()]
            argument = self.import_argument(name, expressions, owner.key, input_spec)
            owner.child_key_map[name] = argument.key

    def import_argument(
        self,
        name: str,
        configs: list[ExpressionConfig],
        parent_key: ContentKey,
        spec: InputSpec | ExpressionSpec,
    ) -> Argument:
        """
        Construct an argument and its child expressions.

        Params:
            name: Parameter name
            configs: Child expression documents
            parent_key: Owning action, function, control or process
            spec: Parameter declaration

        Returns:
            The stored argument

        Raises:
            ConfigurationDocumentError: If a single-valued parameter gets more than one expression
        """
        if not spec.multi and len(configs) != 1:
            raise ConfigurationDocumentError(
                f"Single-valued argument '{name}' requires exactly one expression, got {len(configs)}"
            )
        argument = self.store.add(
            Argument(
                key=self.store.next_key(),
                parent_key=parent_key,
                name=name,
                declared_type=spec.type,
                allowed_type=expand_type(spec.type, self.state.type_system),
                calculated_type=default_value_type(self.state, spec.type),
                allow_multi=spec.multi,
                required=spec.required if isinstance(spec, InputSpec) else True,
                propagate_type_changes=isinstance(spec, InputSpec)
                and spec.influences_return_type,
            )
        )
        for config in configs:
            argument.child_keys.append(self.import_expression(config, argument.key).key)
        return argument

    def import_expression(
        self, config: ExpressionConfig, parent_key: ContentKey
    ) -> Value | Function | Reference:
        match config:
            case ValueConfig():
                return self.import_value(config, parent_key)
            case FunctionConfig():
                return self.import_function(config, parent_key)
            case ReferenceConfig():
                return self.import_reference(config, parent_key)
            case _:
                raise ConfigurationDocumentError(
                    f"Unsupported expression: {type(config).__name__}"
                )

    def import_value(self, config: ValueConfig, parent_key: ContentKey) -> Value:
        argument = self.store.resolve(parent_key, Argument)
        value_type = default_value_type(self.state, argument.declared_type)
        if config.type_id is not None:
            value_type = (config.type_id,)
        value = self.store.add(
            Value(
                key=self.store.next_key(),
                parent_key=parent_key,
                value=config.value,
                type=value_type,
            )
        )
        value.errors.extend(
            validate_value(
                value.value, value.type, self.state.engine_spec, argument.required
            )
        )
        return value

    def import_function(self, config: FunctionConfig, parent_key: ContentKey) -> Function:
        spec = self.state.engine_spec.get_function(config.name)
        output_type, output_multi = (
            (spec.output.type, spec.output.multi) if spec.output else (VOID_TYPE, False)
        )
        function = self.store.add(
            Function(
                key=self.store.next_key(),
                parent_key=parent_key,
                name=config.name,
                type=output_type,
                multi=output_multi,
            )
        )
        self._import_arguments(
            function, config.arguments, spec.inputs, f"function '{config.name}'"
        )
        return function

    def import_reference(self, config: ReferenceConfig, parent_key: ContentKey) -> Reference:
        # Bound to its variable in finish(), once every addressable action exists
        reference = self.store.add(
            Reference(
                key=self.store.next_key(),
                parent_key=parent_key,
                variable_key="",
                path=list(config.path),
            )
        )
        self._pending_references.append((reference, config))
        return reference

    def new_reference(
        self, parent_key: ContentKey, variable: Variable, path: list[str]
    ) -> Reference:
        """
        Construct a reference bound to a known variable.

        Raises:
            ReferencePathError: If the path cannot be walked from the variable's type
        """
        info = resolve_expression_info(variable, path, self.state.engine_spec)
        reference = self.store.add(
            Reference(
                key=self.store.next_key(),
                parent_key=parent_key,
                variable_key=variable.key,
                path=list(path),
                type=info.type,
                multi=info.multi,
                optional=info.optional,
            )
        )
        variable.reference_keys.append(reference.key)
        return reference

    def _bind_reference(self, reference: Reference, config: ReferenceConfig) -> None:
        location = f"reference '{reference.key}'"
        target = find_executable(self.store, tuple(config.coordinates))
        path = list(config.path)
        match target:
            case Action(variable_key=None) | None:
                raise ConfigurationDocumentError(
                    f"Coordinates {config.coordinates} do not address an action with an output",
                    location,
                )
            case Action():
                variable = self.store.resolve(target.variable_key, Variable)
            case Process():
                if not path:
                    raise ConfigurationDocumentError(
                        "References to process inputs require the input name as first path segment",
                        location,
                    )
                base_path, *path = path
                variable = next(
                    (
                        candidate
                        for candidate in map(self.store.get, target.input_variable_keys)
                        if isinstance(candidate, Variable) and candidate.base_path == base_path
                    ),
                    None,
                )
                if variable is None:
                    raise ConfigurationDocumentError(
                        f"Process input '{base_path}' does not exist", location
                    )
            case _:
                raise ConfigurationDocumentError(
                    f"Coordinates {config.coordinates} do not address an action", location
                )

        reference.variable_key = variable.key
        reference.path = path
        variable.reference_keys.append(reference.key)

    def bind_references(self) -> None:
        """
        Link every pending reference to the variable its coordinates address.

        Paths are not resolved here: a variable's type may still change once
        the imported arguments are evaluated.

        Raises:
            ConfigurationDocumentError: If coordinates do not address a variable
        """
        pending, self._pending_references = self._pending_references, []
        for reference, config in pending:
            self._bind_reference(reference, config)
            self._bound_references.append(reference)

    def finish(self) -> None:
        """
        Bind references and validate everything imported by this importer.

        Must be called once the imported nodes are linked into their parents.
        References are typed from their variables before evaluation and refreshed
        after it, so a path through a propagated type resolves, and a path that
        still cannot be walked leaves INVALID_REFERENCE on the reference.
        """
        self.bind_references()
        bound, self._bound_references = self._bound_references, []
        for reference in bound:
            variable = self.store.resolve(reference.variable_key, Variable)
            try:
                info = resolve_expression_info(variable, reference.path, self.state.engine_spec)
            except ReferencePathError:
                # Retried below, once propagation has settled the variable's type
                continue
            reference.type = info.type
            reference.multi = info.multi
            reference.optional = info.optional
        for key in self.imported_roots:
            evaluate_subtree(self.state, key)
        for reference in bound:
            previous = (reference.type, reference.multi)
            refresh_reference(self.state, reference.key)
            if (reference.type, reference.multi) != previous:
                propagate_type_changes(self.state, reference.key)
        refresh_availability(self.state)
        logger.debug(
            "Imported %d subtrees with %d references", len(self.imported_roots), len(bound)
        )

    def discard(self) -> None:
        """Evict every node constructed by this importer and unregister its references."""
        for index in range(self._first_index, self.store.count):
            key = f"{self.store.key_prefix}{index}"
            content = self.store.contents.pop(key, None)
            if isinstance(content, Reference):
                variable = self.store.get(content.variable_key)
                if isinstance(variable, Variable) and key in variable.reference_keys:
                    variable.reference_keys.remove(key)
        self._pending_references = []
        self._bound_references = []
        self.imported_roots = []
        logger.debug("Discarded imported content")

    def track(self, key: ContentKey) -> ContentKey:
        """Register an imported subtree root for evaluation in finish()."""
        self.imported_roots.append(key)
        return key


def import_process(state: EditorState, config: ProcessConfig) -> Process:
    """
    Import a whole configuration document into an empty store.

    Params:
        state: Editor state with an empty store
        config: Process document

    Returns:
        The root process node

    Raises:
        SpecificationError: If the document names an undeclared process, action or function
        ConfigurationDocumentError: If the document cannot be mapped onto the engine specification
    """
    importer = ContentImporter(state)
    process = importer.import_process(config)
    importer.finish()
    return process
