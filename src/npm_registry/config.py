from . import __version__

BASE_URL = "https://registry.npmjs.org"

# seconds; applies to connect, read, write and pool acquisition
DEFAULT_TIMEOUT = 30.0

USER_AGENT = f"npm-registry-client/{__version__}"

DEFAULT_HEADERS = {
    # the abbreviated install document lacks readme, time and author
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}
