"""Browser page that drives the reunion API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["ui"])


@router.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Two upload slots, a generate action, and the result screen."""
    return HTMLResponse(_INDEX_HTML)


_INDEX_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>RewindPix</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .slots { display: flex; gap: 1rem; flex-wrap: wrap; }
      .slot { border: 2px dashed #888; padding: 1rem; width: 280px; cursor: pointer; }
      .slot img, #result img { max-width: 100%; }
      .hidden { display: none; }
      #error { border: 1px solid #b91c1c; padding: 1rem; margin: 1rem 0; }
      button { padding: 0.5rem 1rem; margin: 1rem 0.5rem 0 0; }
    </style>
  </head>
  <body>
    <h1>RewindPix</h1>
    <p>A temporal hug. Reconnect with your younger self.</p>
    <div id="collect">
      <div class="slots">
        <div class="slot" data-slot="child">
          <h3>1. Upload Your Childhood Photo</h3>
          <input type="file" accept="image/png, image/jpeg, image/webp" />
          <img alt="" /><p class="name"></p>
        </div>
        <div class="slot" data-slot="adult">
          <h3>2. Upload Your Recent Photo</h3>
          <input type="file" accept="image/png, image/jpeg, image/webp" />
          <img alt="" /><p class="name"></p>
        </div>
      </div>
      <button id="generate" disabled>Generate Reunion</button>
    </div>
    <div id="loading" class="hidden">
      <p>Your special moment is being created...</p>
      <p>This can take a minute. Please wait.</p>
    </div>
    <div id="error" class="hidden">
      <strong>An Error Occurred</strong><p id="error-text"></p>
    </div>
    <div id="result" class="hidden">
      <h2>Your Reunion is Ready</h2>
      <img id="result-image" alt="Generated reunion" />
      <div>
        <button id="reset">Create Another</button>
        <a id="download" href="/api/reunion/download"><button>Download Image</button></a>
      </div>
    </div>
    <script>
      function render(state) {
        const loading = state.is_loading;
        const result = state.generated_image && !loading;
        document.getElementById('collect').classList.toggle('hidden', loading || result);
        document.getElementById('loading').classList.toggle('hidden', !loading);
        document.getElementById('result').classList.toggle('hidden', !result);
        document.getElementById('error').classList.toggle('hidden', !state.error);
        document.getElementById('error-text').textContent = state.error || '';
        document.getElementById('generate').disabled = !state.can_generate;
        if (result) {
          document.getElementById('result-image').src = state.generated_image;
        }
        for (const slot of document.querySelectorAll('.slot')) {
          const photo = state[slot.dataset.slot + '_photo'];
          slot.querySelector('img').src = photo ? photo.preview : '';
          slot.querySelector('.name').textContent = photo ? photo.file_name : '';
        }
      }

      async function refresh() {
        try {
          const res = await fetch('/api/reunion');
          render(await res.json());
        } catch (err) {
          render({ error: 'Could not reach the server. Please reload the page.' });
        }
      }

      async function call(method, path, body) {
        let res = null;
        let data = null;
        try {
          res = await fetch(path, { method, body });
          data = await res.json();
        } catch (err) {
          data = null;
        }
        if (res && res.ok && data) {
          render(data);
          return;
        }
        alert((data && data.detail) || 'Something went wrong. Please try again.');
        await refresh();
      }

      function upload(slot, file) {
        if (!file) return;
        if (!file.type.startsWith('image/')) {
          alert('Please select a valid image file.');
          return;
        }
        const form = new FormData();
        form.append('file', file);
        call('POST', '/api/reunion/photos/' + slot, form);
      }

      for (const slot of document.querySelectorAll('.slot')) {
        const input = slot.querySelector('input');
        input.addEventListener('change', () => upload(slot.dataset.slot, input.files[0]));
        slot.addEventListener('dragover', (e) => e.preventDefault());
        slot.addEventListener('drop', (e) => {
          e.preventDefault();
          upload(slot.dataset.slot, e.dataTransfer.files[0]);
        });
      }
      document.getElementById('generate').addEventListener('click', () => {
        render({ is_loading: true, can_generate: false });
        call('POST', '/api/reunion/generate');
      });
      document.getElementById('reset').addEventListener('click', () => {
        call('POST', '/api/reunion/reset');
      });
      call('GET', '/api/reunion');
    </script>
  </body>
</html>
"""
