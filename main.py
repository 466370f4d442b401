"""Main entry points for the LuAI assistant."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from agents.download import DownloadAgent
from core.config import LuAIConfig, PortalConfig
from core.graph import create_case_workflow
from core.models import CaseInput, CaseResult
from tools.portal import SuperSapiensPortal
from utils.log_config import setup_logging

logger = logging.getLogger("luai")

# Initialize Rich console
console = Console()

# Replace the sample case below with real case data.
SAMPLE_CASE = CaseInput(
    query=(
        "O segurado possui 35 anos de contribuição e 62 anos de idade. "
        "Tem direito à aposentadoria por tempo de contribuição ou apenas à aposentadoria programada "
        "prevista na Reforma da Previdência (EC 103/2019)?"
    ),
    # urls=["https://www.gov.br/inss/pt-br"],
    # pdf_paths=["./documentos/cnis.pdf"],
)

app = typer.Typer(
    name="luai",
    help="LuAI - Assistente Jurídico Previdenciário",
    add_completion=False
)

tasks_app = typer.Typer(
    name="luai-tarefas",
    help="Download the SuperSapiens task inbox",
    add_completion=False
)


def print_result(case: CaseInput, result: CaseResult) -> None:
    """Render a case result on the console."""
    console.print(Rule("LuAI - Assistente Jurídico Previdenciário"))
    console.print(f"\n[bold]Consulta:[/bold] {case.query}\n")

    console.print(Panel(result.decision or "(sem resposta)", title="DECISÃO", border_style="green"))

    if result.reasoning:
        console.print(Panel(result.reasoning, title="FUNDAMENTAÇÃO", border_style="blue"))

    if result.sources:
        table = Table(title="FONTES CONSULTADAS", show_header=True)
        table.add_column("Fonte", style="cyan")
        for source in result.sources:
            table.add_row(source)
        console.print(table)


@app.command()
def run():
    """Run the sample case and print the decision."""
    load_dotenv()
    setup_logging()

    try:
        # Fails before any network or model call when the key is missing
        config = LuAIConfig.from_env()
        if config.debug:
            setup_logging(debug=True)

        workflow = create_case_workflow(config)
        result = asyncio.run(workflow.run(SAMPLE_CASE))
    except Exception as e:
        logger.error("Erro fatal: %s", e)
        raise typer.Exit(1)

    print_result(SAMPLE_CASE, result)


@tasks_app.command()
def download():
    """Log in to SuperSapiens and save the task list."""
    load_dotenv(override=True)
    setup_logging()

    try:
        config = PortalConfig.from_env()

        agent = DownloadAgent(SuperSapiensPortal(config), config.output_dir)
        tasks = asyncio.run(agent.download_tasks())
    except Exception as e:
        logger.error("Error: %s", e)
        raise typer.Exit(1)

    console.print(f"\n[green]Done: {len(tasks)} task(s) downloaded.[/green]")
    console.print(f"File: {agent.last_output_file}")


def main() -> None:
    app()


def main_tasks() -> None:
    tasks_app()


if __name__ == "__main__":
    main()
