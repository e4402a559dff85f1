# commands.py

import click
from flask import current_app
from flask.cli import with_appcontext
from models.post import Post
from services.errors import NotFound, ReactionError


# reconcile_counters()
@click.command('reconcile-counters')
@click.argument('post_id', required=False)
@with_appcontext
def reconcile_counters(post_id):
    """Recompute likes/dislikes on one post, or on every post."""
    service = current_app.extensions['reactions']
    post_ids = [post_id] if post_id else [str(pk) for pk in Post.objects.scalar('id')]
    reconciled = 0

    for pid in post_ids:
        try:
            counters = service.reconcile(pid)
        except NotFound as err:
            # a single post was asked for, or it was deleted after listing
            if post_id:
                raise click.ClickException(str(err))
            click.echo(f'{pid}: skipped, {err}')
            continue
        except ReactionError as err:
            raise click.ClickException(str(err))

        reconciled += 1
        click.echo(f'{pid}: likes={counters.likes} dislikes={counters.dislikes}')

    click.echo(f'Reconciled {reconciled} post(s)')
