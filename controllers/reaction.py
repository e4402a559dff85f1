# reaction.py

from flask import Blueprint, current_app, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from models.reaction import ReactionAction, ReactionStatus
from services.errors import InvalidInput, ReactionError, ToggleStep

reaction_bp = Blueprint('reaction_bp', __name__, url_prefix='/api')


def reactions():
    return current_app.extensions['reactions']


# resolve_user()
def resolve_user(user_id):
    if user_id != 'me':
        return user_id

    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()

    if identity is None:
        raise InvalidInput('No logged in user for "me"', step=ToggleStep.VALIDATE)

    return identity


@reaction_bp.errorhandler(ReactionError)
def reaction_failed(err):
    current_app.logger.info('%s %s failed with %d: %s', request.method, request.path, err.status_code, err)
    return { 'ok': False, 'message': err.message }, err.status_code


# toggle_like()
@reaction_bp.route('/users/<string:user_id>/likes/<string:post_id>', methods=['PUT'])
def toggle_like(user_id, post_id):
    user_id = resolve_user(user_id)
    toggled = reactions().toggle_reaction(user_id, post_id, ReactionAction.LIKE)

    return {
        'ok': True,
        'status': toggled.status.value,
        'stats': toggled.counters._asdict()
    }, 200


# toggle_dislike()
@reaction_bp.route('/users/<string:user_id>/dislikes/<string:post_id>', methods=['PUT'])
def toggle_dislike(user_id, post_id):
    user_id = resolve_user(user_id)
    toggled = reactions().toggle_reaction(user_id, post_id, ReactionAction.DISLIKE)

    return {
        'ok': True,
        'status': toggled.status.value,
        'stats': toggled.counters._asdict()
    }, 200


# like()
@reaction_bp.route('/users/<string:user_id>/likes/<string:post_id>', methods=['POST'])
def like(user_id, post_id):
    stats = reactions().set_reaction(resolve_user(user_id), post_id, ReactionStatus.LIKED)

    return { 'ok': True, 'status': ReactionStatus.LIKED.value, 'stats': stats._asdict() }, 200


# unlike()
@reaction_bp.route('/users/<string:user_id>/unlikes/<string:post_id>', methods=['DELETE'])
def unlike(user_id, post_id):
    stats = reactions().set_reaction(resolve_user(user_id), post_id, ReactionStatus.NEUTRAL)

    return { 'ok': True, 'status': ReactionStatus.NEUTRAL.value, 'stats': stats._asdict() }, 200


# get_user_likes()
@reaction_bp.route('/users/<string:user_id>/likes', methods=['GET'])
def get_user_likes(user_id):
    likes = reactions().posts_reacted_by(resolve_user(user_id), ReactionStatus.LIKED)
    return { 'likes': likes }, 200


# get_user_dislikes()
@reaction_bp.route('/users/<string:user_id>/dislikes', methods=['GET'])
def get_user_dislikes(user_id):
    dislikes = reactions().posts_reacted_by(resolve_user(user_id), ReactionStatus.DISLIKED)
    return { 'dislikes': dislikes }, 200


# get_post_likes()
@reaction_bp.route('/posts/<string:post_id>/likes', methods=['GET'])
def get_post_likes(post_id):
    return { 'likes': reactions().users_reacting_to(post_id, ReactionStatus.LIKED) }, 200


# get_post_dislikes()
@reaction_bp.route('/posts/<string:post_id>/dislikes', methods=['GET'])
def get_post_dislikes(post_id):
    return { 'dislikes': reactions().users_reacting_to(post_id, ReactionStatus.DISLIKED) }, 200


# get_post_stats()
@reaction_bp.route('/posts/<string:post_id>/stats', methods=['GET'])
def get_post_stats(post_id):
    return { 'stats': reactions().stats(post_id)._asdict() }, 200
