from bson.objectid import ObjectId

from commands import reconcile_counters
from models.post import Post
from services.errors import StoreUnavailable, ToggleStep


def test_reconcile_all_posts(app, service, make_user, make_post):
    user, p1, p2 = make_user('u1'), make_post(), make_post()
    service.toggle_reaction(str(user.id), str(p1.id), 'LIKE')
    Post.objects(id=p1.id).update_one(set__stats__likes=5)
    Post.objects(id=p2.id).update_one(set__stats__dislikes=3)

    result = app.test_cli_runner().invoke(reconcile_counters)

    assert result.exit_code == 0
    assert 'Reconciled 2 post(s)' in result.output
    p1.reload()
    p2.reload()
    assert (p1.stats.likes, p1.stats.dislikes) == (1, 0)
    assert (p2.stats.likes, p2.stats.dislikes) == (0, 0)


def test_reconcile_one_post(app, make_post):
    post = make_post()

    result = app.test_cli_runner().invoke(reconcile_counters, [str(post.id)])

    assert result.exit_code == 0
    assert f'{post.id}: likes=0 dislikes=0' in result.output


def test_reconcile_missing_post_fails(app):
    result = app.test_cli_runner().invoke(reconcile_counters, [str(ObjectId())])

    assert result.exit_code == 1
    assert 'not found' in result.output


def test_reconcile_all_skips_posts_deleted_while_running(app, make_user, make_post):
    user = make_user('u1')
    gone, kept = make_post(author=user), make_post(author=user)
    Post.objects(id=kept.id).update_one(set__stats__likes=6)
    service = app.extensions['reactions']
    reconcile = service.reconcile

    def reconcile_after_delete(pid):
        if pid == str(gone.id):
            Post.objects(id=gone.id).delete()
        return reconcile(pid)

    service.reconcile = reconcile_after_delete

    result = app.test_cli_runner().invoke(reconcile_counters)

    assert result.exit_code == 0
    assert f'{gone.id}: skipped' in result.output
    assert 'Reconciled 1 post(s)' in result.output
    kept.reload()
    assert kept.stats.likes == 0


def test_reconcile_all_aborts_when_store_is_down(app, make_post):
    make_post()
    make_post()
    service = app.extensions['reactions']

    def store_down(pid):
        raise StoreUnavailable('no primary', step=ToggleStep.RECOUNT)

    service.reconcile = store_down

    result = app.test_cli_runner().invoke(reconcile_counters)

    assert result.exit_code == 1
    assert 'Reconciled' not in result.output
