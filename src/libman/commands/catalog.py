"""Static command tables for every shell scope."""

from __future__ import annotations

from libman.commands.registry import CommandRegistry
from libman.commands.types import (
    AlbumCommand,
    ArtistCommand,
    CommandDescriptor,
    GlobalCommand,
    PlaylistCommand,
    TrackCommand,
)

_GLOBAL_COMMANDS: tuple[CommandDescriptor[GlobalCommand], ...] = (
    # search commands
    CommandDescriptor(
        id=GlobalCommand.SEARCH,
        name="search",
        aliases=("s", "find"),
        short_description="search tracks, artists, albums and playlists at once",
        usage="search <query>",
        help=(
            "Searches every kind of item and lists a few results of each.\n"
            "Pick a number to play it, or leave the prompt blank to cancel."
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.SEARCH_TRACK,
        name="tracks",
        aliases=("st", "search-track"),
        short_description="search tracks and browse the results",
        usage="tracks <query>\n  tracks <name> by <artist>",
        help=(
            "Searches tracks and opens a result shell.\n"
            "In the result shell, type a number to play that track or `help` "
            "for the available actions."
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.SEARCH_ALBUM,
        name="albums",
        aliases=("sal", "search-album"),
        short_description="search albums and browse the results",
        usage="albums <query>\n  albums <name> by <artist>",
        help="Searches albums and opens a result shell.",
    ),
    CommandDescriptor(
        id=GlobalCommand.SEARCH_ARTIST,
        name="artists",
        aliases=("sar", "search-artist"),
        short_description="search artists and browse the results",
        usage="artists <query>",
        help="Searches artists and opens a result shell.",
    ),
    CommandDescriptor(
        id=GlobalCommand.SEARCH_PLAYLIST,
        name="playlists",
        aliases=("spl", "search-playlist"),
        short_description="search public playlists and browse the results",
        usage="playlists <query>",
        help="Searches playlists and opens a result shell.",
    ),
    # play-first commands
    CommandDescriptor(
        id=GlobalCommand.PLAY_TRACK,
        name="play",
        aliases=("p", "pt", "play-track"),
        short_description="play the first track matching a query",
        usage="play <query>\n  play <name> by <artist>",
        help="Searches tracks and immediately plays the best match.",
    ),
    CommandDescriptor(
        id=GlobalCommand.PLAY_ALBUM,
        name="album",
        aliases=("pal", "play-album"),
        short_description="play the first album matching a query",
        usage="album <query>\n  album <name> by <artist>",
        help="Searches albums and immediately plays the best match from its start.",
    ),
    CommandDescriptor(
        id=GlobalCommand.PLAY_ARTIST,
        name="artist",
        aliases=("par", "play-artist"),
        short_description="play the first artist matching a query",
        usage="artist <query>",
        help="Searches artists and immediately plays the best match.",
    ),
    CommandDescriptor(
        id=GlobalCommand.PLAY_PLAYLIST,
        name="playlist",
        aliases=("ppl", "play-playlist"),
        short_description="play the first public playlist matching a query",
        usage="playlist <query>",
        help="Searches playlists and immediately plays the best match.",
    ),
    # player commands
    CommandDescriptor(
        id=GlobalCommand.SET_VOLUME,
        name="volume",
        aliases=("vol", "v"),
        short_description="set the playback volume",
        usage="volume <0-100>\n  +<n>\n  -<n>",
        help=(
            "Sets the volume of the playing device. Values above 100 are "
            "treated as 100.\n"
            "Typing `+10` or `-10` on its own changes the active device's "
            "volume relatively."
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.SHUFFLE,
        name="shuffle",
        aliases=("sh",),
        short_description="toggle or set shuffle",
        usage="shuffle [on|off]",
        help=(
            "Without an argument, flips the current shuffle state.\n"
            "Accepts on/true/yes and off/false/no."
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.REPEAT,
        name="repeat",
        aliases=("rep", "loop"),
        short_description="set the repeat mode",
        usage="repeat <off|track|context>",
        help=(
            "off: off, false, no\n"
            "track: track, on, true, yes\n"
            "context: context, playlist, album, pl"
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.NEXT,
        name="next",
        aliases=("n", "skip"),
        short_description="skip to the next track",
        usage="next",
        help="Skips to the next track in the queue.",
    ),
    CommandDescriptor(
        id=GlobalCommand.PREV,
        name="prev",
        aliases=("previous", "back"),
        short_description="go back to the previous track",
        usage="prev",
        help="Goes back to the previous track.",
    ),
    # library commands
    CommandDescriptor(
        id=GlobalCommand.SAVE_PLAYING,
        name="save",
        aliases=("add",),
        short_description="save the playing track to one of your playlists",
        usage="save [playlist name]",
        help=(
            "Adds the currently playing track to the top of a playlist.\n"
            "Without a name, lists your playlists and asks for a number.\n"
            "Nothing is added when the track is already in the playlist."
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.REMOVE_PLAYING,
        name="remove",
        aliases=("rm",),
        short_description="remove the playing track from one of your playlists",
        usage="remove [playlist name]",
        help=(
            "Removes every occurrence of the currently playing track from a "
            "playlist.\nWithout a name, lists your playlists and asks for a number."
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.CREATE_PLAYLIST,
        name="create",
        aliases=("new", "mkpl"),
        short_description="create a new playlist",
        usage="create [name]",
        help="Asks for a description and visibility, then creates the playlist.",
    ),
    CommandDescriptor(
        id=GlobalCommand.EDIT_PLAYLIST,
        name="edit",
        aliases=("editpl",),
        short_description="edit one of your playlists",
        usage="edit [playlist name]",
        help="Changes the name, description or visibility of a playlist.",
    ),
    CommandDescriptor(
        id=GlobalCommand.DELETE_PLAYLIST,
        name="delete",
        aliases=("del", "rmpl"),
        short_description="delete one of your playlists",
        usage="delete [playlist name]",
        help="Removes a playlist from your library after confirmation.",
    ),
    # misc commands
    CommandDescriptor(
        id=GlobalCommand.PLAY_USER_PLAYLIST,
        name="lib",
        aliases=("library", "mypl"),
        short_description="play one of your playlists",
        usage="lib [playlist name]",
        help="Plays a playlist from your library, chosen by name or number.",
    ),
    CommandDescriptor(
        id=GlobalCommand.SET_DEVICE,
        name="device",
        aliases=("dev",),
        short_description="choose the playback device",
        usage="device [device name]",
        help=(
            "Transfers playback to a device and uses it for later player "
            "commands.\nDevice names are case sensitive."
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.SHOW,
        name="show",
        aliases=("status", "info"),
        short_description="show playback, the playing track or your library",
        usage="show\n  show playing|track\n  show lib|pl\n  show <playlist name>",
        help=(
            "show: player status\n"
            "show playing: the current track or episode\n"
            "show lib: your playlists\n"
            "show <name>: the tracks of one of your playlists"
        ),
    ),
    CommandDescriptor(
        id=GlobalCommand.SET_PROMPT,
        name="prompt",
        aliases=("ps1",),
        short_description="change the prompt text",
        usage="prompt <text>",
        help="Replaces the text shown before each command.",
    ),
    CommandDescriptor(
        id=GlobalCommand.HELP,
        name="help",
        aliases=("h", "?"),
        short_description="list commands or show help for one",
        usage="help [command]",
        help="Without an argument, lists every command.",
    ),
)

_TRACK_COMMANDS: tuple[CommandDescriptor[TrackCommand], ...] = (
    CommandDescriptor(
        id=TrackCommand.PLAY,
        name="play",
        aliases=("p",),
        short_description="play a track and leave the results",
        usage="play <index>",
        help="Plays the track at <index>. Typing the index alone does the same.",
        exits_shell=True,
    ),
    CommandDescriptor(
        id=TrackCommand.QUEUE,
        name="queue",
        aliases=("q", "enqueue"),
        short_description="add a track to the playback queue",
        usage="queue <index>",
        help="Adds the track at <index> to the end of the queue.",
    ),
    CommandDescriptor(
        id=TrackCommand.SAVE,
        name="save",
        aliases=("add",),
        short_description="add a track to one of your playlists",
        usage="save <index> [playlist name]",
        help=(
            "Adds the track at <index> to a playlist. Without a name, lists "
            "your playlists and asks for a number."
        ),
    ),
    CommandDescriptor(
        id=TrackCommand.LIKE,
        name="like",
        aliases=("l", "heart"),
        short_description="save a track to your liked songs",
        usage="like <index>",
        help="Adds the track at <index> to your liked songs.",
    ),
    CommandDescriptor(
        id=TrackCommand.HELP,
        name="help",
        aliases=("h", "?"),
        short_description="list actions or show help for one",
        usage="help [action]",
        help="Leave the prompt blank to go back.",
    ),
)

_ALBUM_COMMANDS: tuple[CommandDescriptor[AlbumCommand], ...] = (
    CommandDescriptor(
        id=AlbumCommand.PLAY,
        name="play",
        aliases=("p",),
        short_description="play an album and leave the results",
        usage="play <index>",
        help="Plays the album at <index> from its first track.",
        exits_shell=True,
    ),
    CommandDescriptor(
        id=AlbumCommand.QUEUE,
        name="queue",
        aliases=("q", "enqueue"),
        short_description="add every track of an album to the queue",
        usage="queue <index>",
        help="Queues the tracks of the album at <index> in order.",
    ),
    CommandDescriptor(
        id=AlbumCommand.SAVE,
        name="save",
        aliases=("like", "l"),
        short_description="save an album to your library",
        usage="save <index>",
        help="Adds the album at <index> to your saved albums.",
    ),
    CommandDescriptor(
        id=AlbumCommand.HELP,
        name="help",
        aliases=("h", "?"),
        short_description="list actions or show help for one",
        usage="help [action]",
        help="Leave the prompt blank to go back.",
    ),
)

_ARTIST_COMMANDS: tuple[CommandDescriptor[ArtistCommand], ...] = (
    CommandDescriptor(
        id=ArtistCommand.PLAY,
        name="play",
        aliases=("p",),
        short_description="play an artist and leave the results",
        usage="play <index>",
        help="Plays the artist at <index>.",
        exits_shell=True,
    ),
    CommandDescriptor(
        id=ArtistCommand.QUEUE,
        name="queue",
        aliases=("q", "enqueue"),
        short_description="add an artist's top tracks to the queue",
        usage="queue <index>",
        help="Queues the top tracks of the artist at <index>.",
    ),
    CommandDescriptor(
        id=ArtistCommand.FOLLOW,
        name="follow",
        aliases=("f",),
        short_description="follow an artist",
        usage="follow <index>",
        help="Follows the artist at <index>.",
    ),
    CommandDescriptor(
        id=ArtistCommand.HELP,
        name="help",
        aliases=("h", "?"),
        short_description="list actions or show help for one",
        usage="help [action]",
        help="Leave the prompt blank to go back.",
    ),
)

_PLAYLIST_COMMANDS: tuple[CommandDescriptor[PlaylistCommand], ...] = (
    CommandDescriptor(
        id=PlaylistCommand.PLAY,
        name="play",
        aliases=("p",),
        short_description="play a playlist and leave the results",
        usage="play <index>",
        help="Plays the playlist at <index> from its first track.",
        exits_shell=True,
    ),
    CommandDescriptor(
        id=PlaylistCommand.QUEUE,
        name="queue",
        aliases=("q", "enqueue"),
        short_description="add every track of a playlist to the queue",
        usage="queue <index>",
        help="Queues the tracks of the playlist at <index> in order.",
    ),
    CommandDescriptor(
        id=PlaylistCommand.FOLLOW,
        name="follow",
        aliases=("f",),
        short_description="follow a playlist",
        usage="follow <index>",
        help="Adds the playlist at <index> to your library.",
    ),
    CommandDescriptor(
        id=PlaylistCommand.HELP,
        name="help",
        aliases=("h", "?"),
        short_description="list actions or show help for one",
        usage="help [action]",
        help="Leave the prompt blank to go back.",
    ),
)


def global_registry() -> CommandRegistry[GlobalCommand]:
    """Build the top-level command registry."""
    return CommandRegistry(_GLOBAL_COMMANDS)


def track_registry() -> CommandRegistry[TrackCommand]:
    """Build the track result-shell registry."""
    return CommandRegistry(_TRACK_COMMANDS)


def album_registry() -> CommandRegistry[AlbumCommand]:
    """Build the album result-shell registry."""
    return CommandRegistry(_ALBUM_COMMANDS)


def artist_registry() -> CommandRegistry[ArtistCommand]:
    """Build the artist result-shell registry."""
    return CommandRegistry(_ARTIST_COMMANDS)


def playlist_registry() -> CommandRegistry[PlaylistCommand]:
    """Build the playlist result-shell registry."""
    return CommandRegistry(_PLAYLIST_COMMANDS)
