from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """
    Token auth read from `Authorization: Bearer <token>`
    """

    keyword = "Bearer"
