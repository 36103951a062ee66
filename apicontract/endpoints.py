"""Endpoint paths for the APIs under test.

Base URLs live in ``apicontract.common.config``; this module only holds the
path catalogue each suite builds requests from.
"""


class JsonPlaceholder:
    POSTS = "/posts"
    USERS = "/users"
    COMMENTS = "/comments"
    ALBUMS = "/albums"
    PHOTOS = "/photos"
    TODOS = "/todos"


class ReqRes:
    USERS = "/users"
    LOGIN = "/login"
    REGISTER = "/register"
    UNKNOWN = "/unknown"


class HttpBin:
    GET = "/get"
    POST = "/post"
    PUT = "/put"
    PATCH = "/patch"
    DELETE = "/delete"
    STATUS = "/status"
    HEADERS = "/headers"
    IP = "/ip"
    DELAY = "/delay"
    JSON = "/json"


class DogApi:
    RANDOM = "/breeds/image/random"
    BREEDS = "/breeds/list/all"
    BREED_IMAGES = "/breed"

    # Every image URL the API hands out, optionally narrowed to a breed folder
    IMAGE_URL_PATTERN = r"^https://images\.dog\.ceo/breeds/{breed}.*\.(jpg|jpeg|png)$"


class CatFacts:
    FACT = "/fact"
    FACTS = "/facts"
    BREEDS = "/breeds"
