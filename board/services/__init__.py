# Services package.
#
#   article_service  — CRUD + previous/next navigation for Article
#
# Services receive their SqlRunner through the constructor; wiring lives
# in ``board.container.build_container``.
