"""
Screen Share Module

Start/stop toggle for sharing the student's screen during a lesson. The capture
request runs in the browser; its outcome comes back on a later script run.
"""

import logging
from typing import Callable, Optional, Union

from streamlit_js_eval import streamlit_js_eval

logger = logging.getLogger(__name__)

# Resolves to true once the stream is granted, or to the error text otherwise.
# Runs against the parent page, which holds the activation from the button click.
DISPLAY_MEDIA_JS = """
(() => {
  const media = window.parent.navigator.mediaDevices;
  if (!media || !media.getDisplayMedia) {
    return Promise.resolve("getDisplayMedia is not supported");
  }
  return media.getDisplayMedia({ video: true })
    .then((stream) => { window.parent.classroomScreenShare = stream; return true; })
    .catch((error) => { console.error("Screen sharing failed:", error); return String(error); });
})()
"""

CaptureResult = Optional[Union[bool, str]]


def browser_display_capture(request_id: int) -> CaptureResult:
    """Request a display capture stream from the browser.

    Returns None while the browser has not answered yet, True when the stream
    was granted, and the error text when it was refused.
    """
    return streamlit_js_eval(js_expressions=DISPLAY_MEDIA_JS, key=f"display_capture_{request_id}")


class ScreenShareSession:
    """Holds the sharing flag and collects capture results from an injected capability"""

    def __init__(self, capability: Callable[[int], CaptureResult] = browser_display_capture):
        self.capability = capability
        self.is_sharing = False
        self.pending = False
        self.request_id = 0

    def toggle(self):
        """Stop sharing if started, otherwise queue a new capture request"""
        if self.is_sharing:
            self.stop()
            logger.info("Screen sharing stopped")
            return

        self.request_id += 1
        self.pending = True

    def poll(self) -> bool:
        """Check the pending capture request. Returns the sharing flag.

        Only a granted request turns sharing on; refusals and errors are
        logged and leave it off.
        """
        if not self.pending:
            return self.is_sharing

        try:
            result = self.capability(self.request_id)
        except Exception as e:
            self.pending = False
            logger.error(f"Screen sharing failed: {e}")
            return self.is_sharing

        if result is None:
            return self.is_sharing

        self.pending = False
        if result is True:
            self.is_sharing = True
            logger.info("Screen sharing started")
        else:
            logger.error(f"Screen sharing failed: {result}")
        return self.is_sharing

    def stop(self):
        self.is_sharing = False
        self.pending = False
