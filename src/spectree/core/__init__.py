"""
Spec tree core.

Components:
- models: NodeKind, ExecState, ExecutionMode and the report models
- assertions: failure signals and primitive assertions used by node actions
- builder: argument validation and the precedence walk
- node: Node and the fluent given/when/it chain
- engine: Isolated and Quick execution, SpecRunner
- report: text and structured reports
"""
