"""streamgrab — resolve media URLs into stream URLs, metadata and cached audio.

Extraction is delegated to the external ``yt-dlp`` executable; this
package owns credential provisioning, command assembly, bounded process
execution, output parsing and cache-file lifecycle.
"""

from streamgrab.version import __version__

__all__: list[str] = ["__version__"]
