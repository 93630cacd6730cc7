# cli/commands/chat.py
import click
from catalog.conversation import ConversationHandler, InMemorySessionStore, Reply
from catalog.sa.database import Database
from catalog.services import SearchService

CONSOLE_USER = "console"

def print_reply(reply: Reply) -> list:
    """Print a reply and return its buttons flattened in display order"""
    click.echo("\n" + reply.text)
    buttons = [button for row in reply.buttons for button in row]
    if buttons:
        click.echo("")
        for i, button in enumerate(buttons, 1):
            click.echo(click.style(f"[b{i}] ", fg='blue') + click.style(button.label, fg='cyan'))
    return buttons

@click.command()
@click.option('--db-url', default=None, help='Database URL (default: DATABASE_URL)')
def chat(db_url: str):
    """Talk to the catalog bot in the terminal

    Type text to send a message, b<N> to press button N, or q to quit.
    """
    database = Database(db_url)
    store = InMemorySessionStore()
    session = database.get_session()
    try:
        handler = ConversationHandler(SearchService(session), store)
        reply = handler.handle_text(CONSOLE_USER, "/start")
        buttons = print_reply(reply)

        while True:
            line = click.prompt(click.style(">", fg='green'), default="", show_default=False).strip()
            if line.lower() in ("q", "quit", "exit"):
                break

            if line.lower().startswith("b") and line[1:].isdigit():
                index = int(line[1:]) - 1
                if not 0 <= index < len(buttons):
                    click.echo(click.style("No such button", fg='yellow'))
                    continue
                reply = handler.handle_action(CONSOLE_USER, buttons[index].action, displayed_text=reply.text)
            else:
                reply = handler.handle_text(CONSOLE_USER, line)
            buttons = print_reply(reply)
    finally:
        session.close()
