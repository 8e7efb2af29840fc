"""Example: Play a short queue with stub sources."""

import sys
import time

from tunequeue import MusicPlayer, PlayerConfig, PlaybackViewModel, Song, SourceKind
from tunequeue.utils.log import set_log_level

if __name__ == "__main__":
    if "-v" in sys.argv:
        set_log_level("INFO")

    # Run ten times faster than real time
    config = PlayerConfig(tick_interval=0.1)

    songs = [
        Song("Intro", "The Stubs", 2.0),
        Song("Remote Hit", "Streamers", 3.0, SourceKind.REMOTE, "spotify:track:123"),
        Song("Outro", "The Stubs", 2.0),
    ]

    with MusicPlayer(config) as player:
        vm = PlaybackViewModel(player)
        vm.on_change(
            lambda v: print(
                f"\r{v.song_title:<12} [{v.play_button_label:<5}] "
                f"{v.progress:4.1f}s ({v.progress_fraction:4.0%})",
                end="",
                flush=True,
            )
        )

        player.load_queue(songs)
        player.play()

        try:
            while player.is_playing:
                time.sleep(0.05)
            print("\nQueue finished")
        except KeyboardInterrupt:
            print("\nInterrupted, stopping...")
            player.stop()
        finally:
            vm.close()
