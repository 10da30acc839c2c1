"""Service layer for cmdtree.

Services never import from cmdtree.ui, cmdtree.cli, or typer. The CLI
handles presentation.
"""
