"""
Markup for the floating summary UI (Bootstrap classes).
"""
from hub_summarizer.core.config import BUTTON_BOTTOM, BUTTON_RIGHT

# Element ids
SUMMARIZE_BUTTON_ID = "summarizeBtn"
SUMMARIZE_SPINNER_ID = "summarizeBtnSpinner"
SUMMARIZE_LABEL_ID = "summarizeBtnLabel"

POPUP_ID = "summaryPopup"
POPUP_CONTENT_ID = "popupContent"
POPUP_SPINNER_ID = "popupSpinner"
POPUP_ERROR_ID = "popupError"
SUMMARY_TEXT_ID = "summaryText"
RELOAD_BUTTON_ID = "reloadBtn"
MINIMIZE_BUTTON_ID = "minimizeBtn"
DOWNLOAD_BUTTON_ID = "downloadBtn"

MINI_BAR_ID = "miniBar"
MINI_SUMMARIZE_BUTTON_ID = "miniSummarizeBtn"
MINI_SUMMARIZE_SPINNER_ID = "miniSummarizeSpinner"
MINI_SUMMARIZE_LABEL_ID = "miniSummarizeLabel"
MINI_EXPAND_BUTTON_ID = "miniExpandBtn"


def stylesheet_link(element_id: str, href: str) -> str:
    return f'<link id="{element_id}" rel="stylesheet" href="{href}">'


def summarize_button() -> str:
    return f"""
<button id="{SUMMARIZE_BUTTON_ID}" class="btn btn-primary d-flex align-items-center gap-2"
        style="position: fixed; bottom: {BUTTON_BOTTOM}; right: {BUTTON_RIGHT}; z-index: 1000">
  <span id="{SUMMARIZE_SPINNER_ID}" class="spinner-border spinner-border-sm" role="status" aria-hidden="true" style="display: none"></span>
  <i class="bi bi-lightning-charge-fill"></i>
  <span id="{SUMMARIZE_LABEL_ID}">Summarize</span>
</button>
"""


def popup() -> str:
    return f"""
<div id="{POPUP_ID}" class="shadow-lg bg-white border rounded"
     style="position: fixed; z-index: 2000; top: 10px; height: calc(100vh - 60px); width: 33vw; right: 10px">
  <div class="d-flex justify-content-between align-items-center border-bottom p-2 bg-light">
    <div class="d-flex align-items-center gap-2">
      <strong>Summary</strong>
    </div>
    <div class="d-flex gap-2">
      <button id="{RELOAD_BUTTON_ID}" class="btn btn-sm btn-outline-secondary"><i class="bi bi-arrow-clockwise"></i></button>
      <button id="{MINIMIZE_BUTTON_ID}" class="btn btn-sm btn-outline-secondary"><i class="bi bi-dash"></i></button>
    </div>
  </div>
  <div id="{POPUP_CONTENT_ID}" class="p-3" style="height: calc(100% - 90px); overflow-y: auto">
    <div id="{POPUP_SPINNER_ID}" class="d-flex justify-content-center my-3" style="display: none">
      <div class="spinner-border" role="status" aria-label="Loading"></div>
    </div>
    <div id="{POPUP_ERROR_ID}" class="alert alert-danger" role="alert" style="display: none"></div>
    <p id="{SUMMARY_TEXT_ID}"></p>
  </div>
  <div class="border-top p-2 text-end" style="position: absolute; bottom: 0; width: 100%">
    <button id="{DOWNLOAD_BUTTON_ID}" class="btn btn-success"><i class="bi bi-download"></i> Download</button>
  </div>
</div>
"""


def reload_placeholder(time_label: str) -> str:
    return f"<p>Reloaded at {time_label}.</p>"


def mini_bar() -> str:
    return f"""
<div id="{MINI_BAR_ID}" class="btn-group shadow"
     style="position: fixed; bottom: {BUTTON_BOTTOM}; right: {BUTTON_RIGHT}; z-index: 1500">
  <button id="{MINI_SUMMARIZE_BUTTON_ID}" class="btn btn-primary">
    <span id="{MINI_SUMMARIZE_SPINNER_ID}" class="spinner-border spinner-border-sm" role="status" aria-hidden="true" style="display: none"></span>
    <span id="{MINI_SUMMARIZE_LABEL_ID}">Summarize</span>
  </button>
  <button id="{MINI_EXPAND_BUTTON_ID}" class="btn btn-outline-primary"><i class="bi bi-arrows-angle-expand"></i></button>
</div>
"""
