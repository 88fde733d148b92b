from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="sortcheck", help="Check first/last claims on ordered collections")
schema_app = typer.Typer(name="schema", help="Generate schema tooling")
app.add_typer(schema_app, name="schema")


@app.command()
def run(
    config: str = typer.Argument(help="Path to check suite YAML"),
    check: str | None = typer.Option(None, help="Run only this check"),
    output_dir: str = typer.Option("runs", help="Output directory for run results"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Run every check in a suite and report diagnosed failures."""
    from pydantic import ValidationError

    from sortcheck.config import load_config
    from sortcheck.errors import OrderingError
    from sortcheck.runner import Runner

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        suite = load_config(config_path)
    except ValidationError as e:
        typer.echo(f"Error: invalid suite {config}:\n{e}", err=True)
        raise typer.Exit(1)

    runner = Runner(
        config=suite,
        output_dir=Path(output_dir),
        check_filter=check,
        verbose=verbose,
    )

    try:
        run_dir = runner.execute()
    except (ValueError, OrderingError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for check_name, result in runner.results.items():
        status = "PASS" if result["all_passed"] else "FAIL"
        typer.echo(f"{status}  {check_name}")
        for assertion in result["assertions"]:
            if not assertion["passed"]:
                typer.echo(f"  {assertion['name']} [{assertion['category']}]")
                for line in assertion["message"].splitlines():
                    typer.echo(f"    {line}")

    typer.echo(f"Run complete: {run_dir}")
    typer.echo(f"Report: {run_dir / 'junit.xml'}")
    if not verbose:
        typer.echo(f"Debug log: {run_dir / 'debug.log'}")

    if not runner.all_passed:
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(
        "sortcheck", "--dir", help="Directory to initialize the check project in"
    ),
):
    """Initialize a new check project with an example suite."""
    project_dir = Path(dir)

    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "suite.yaml"
    if example.exists():
        typer.echo(f"suite.yaml already exists in {dir}, skipping.")
        return

    example.write_text("""\
subjects:
  scores:
    kind: map
    entries: [[0, 0], [1, 1], [2, 1], [3, 3]]
  ids:
    kind: set
    elements: [0, 1, 2]

checks:
  - name: score-bounds
    subject: scores
    assertions:
      - first_key: 0
      - last_entry: {key: 3, value: 3}
  - name: id-bounds
    subject: ids
    assertions:
      - first_element: 0
      - last_element: 2
""")

    typer.echo(f"Initialized check project in {dir}:")
    typer.echo("  suite.yaml       - example check suite")


@schema_app.command("generate")
def schema_generate(
    dir: str = typer.Option(
        "sortcheck", "--dir", help="Project directory for default schema/doc outputs"
    ),
    out: str | None = typer.Option(
        None,
        help="Output path for JSON Schema (defaults to <dir>/schemas/sortcheck.schema.json)",
    ),
    doc: str | None = typer.Option(
        None, help="Output path for schema docs (defaults to <dir>/docs/schema.md)"
    ),
):
    """Generate JSON Schema and docs for the check suite YAML format."""
    from sortcheck.schema import write_json_schema, write_schema_doc

    project_dir = Path(dir)
    out_path = (
        Path(out)
        if out is not None
        else project_dir / "schemas" / "sortcheck.schema.json"
    )
    doc_path = Path(doc) if doc is not None else project_dir / "docs" / "schema.md"
    write_json_schema(out_path)
    write_schema_doc(doc_path)
    typer.echo(f"Wrote schema: {out_path}")
    typer.echo(f"Wrote docs: {doc_path}")
