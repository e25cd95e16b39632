"""Minimal HTML pages that consume the gallery API."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def landing_page() -> HTMLResponse:
    """Landing page with links to the gallery sections."""
    return HTMLResponse(_page("Moments Studio", _LANDING_BODY))


@router.get("/albums", response_class=HTMLResponse)
async def albums_page() -> HTMLResponse:
    """Public album list."""
    return HTMLResponse(_page("Albums", _ALBUMS_BODY))


@router.get("/find-photos", response_class=HTMLResponse)
async def find_photos_page() -> HTMLResponse:
    """Face search landing page; the search itself is not available yet."""
    return HTMLResponse(_page("Find Your Photos", _FIND_PHOTOS_BODY))


@router.get("/admin", response_class=HTMLResponse)
async def admin_page() -> HTMLResponse:
    """Admin dashboard for album creation and photo upload."""
    return HTMLResponse(_page("Admin Dashboard", _ADMIN_BODY))


def _page(title: str, body: str) -> str:
    return _LAYOUT.replace("{title}", title).replace("{body}", body)


_LAYOUT = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{title}</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      nav a { margin-right: 1rem; }
      .row { margin-bottom: 1rem; }
      .album { display: inline-block; width: 240px; margin: 0 1rem 1rem 0; }
      .album img { width: 100%; }
      input, select { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <nav>
      <a href="/">Home</a><a href="/albums">Albums</a>
      <a href="/find-photos">Find Photos</a><a href="/admin">Admin</a>
    </nav>
    <h1>{title}</h1>
    {body}
  </body>
</html>
"""

_LANDING_BODY = """
    <p>Relive every moment of your wedding day.</p>
    <p><a href="/albums">Browse albums</a> or
      <a href="/find-photos">find the photos you appear in</a>.</p>
"""

_ALBUMS_BODY = """
    <div class="row">
      <input id="search" placeholder="Search by couple names" />
      <button onclick="loadAlbums()">Search</button>
    </div>
    <div id="albums">Loading...</div>
    <script>
      async function loadAlbums() {
        const search = document.getElementById('search').value;
        const target = document.getElementById('albums');
        const res = await fetch('/api/albums?search=' + encodeURIComponent(search));
        const data = await res.json();
        if (!res.ok) {
          target.textContent = 'Error: ' + (data.error || res.status);
          return;
        }
        target.innerHTML = '';
        for (const album of data.albums) {
          const card = document.createElement('div');
          card.className = 'album';
          const img = document.createElement('img');
          img.src = album.cover_photo_url || '';
          const caption = document.createElement('p');
          caption.textContent = album.couple_names + ' · ' + album.event_date
            + ' · ' + album.photo_count + ' photos';
          card.append(img, caption);
          target.append(card);
        }
        if (!data.albums.length) {
          target.textContent = 'No albums yet.';
        }
      }
      loadAlbums();
    </script>
"""

_FIND_PHOTOS_BODY = """
    <p>Upload a selfie to find every photo you appear in.</p>
    <div class="row"><input id="selfie" type="file" accept="image/*" /></div>
    <button onclick="findPhotos()">Find My Photos</button>
    <pre id="output">Face search is coming soon.</pre>
    <script>
      function findPhotos() {
        const file = document.getElementById('selfie').files[0];
        document.getElementById('output').textContent = file
          ? 'Face search is not available yet.'
          : 'Choose a photo first.';
      }
    </script>
"""

_ADMIN_BODY = """
    <div class="row">
      <label>Session token</label><br />
      <input id="token" type="password" placeholder="Supabase access token" />
    </div>
    <h2>Create Album</h2>
    <form id="album-form">
      <div class="row"><input name="coupleNames" placeholder="e.g., Sarah &amp; James" /></div>
      <div class="row"><input name="eventDate" type="date" /></div>
      <div class="row"><input name="coverPhoto" type="file" accept="image/*" /></div>
      <button type="submit">Create Album</button>
    </form>
    <h2>Upload Photos</h2>
    <form id="photos-form">
      <div class="row"><select name="albumId" id="album-select"></select></div>
      <div class="row">
        <input name="photos" type="file" accept="image/jpeg,image/png" multiple />
      </div>
      <button type="submit">Upload Photos</button>
    </form>
    <pre id="output">Ready.</pre>
    <script>
      const output = document.getElementById('output');

      async function loadAlbumOptions() {
        const res = await fetch('/api/albums');
        const data = await res.json();
        const select = document.getElementById('album-select');
        select.innerHTML = '';
        for (const album of data.albums || []) {
          const option = document.createElement('option');
          option.value = album.id;
          option.textContent = album.couple_names + ' (' + album.event_date + ')';
          select.append(option);
        }
      }

      async function submitForm(form, action, extra) {
        const body = new FormData(form);
        body.append('action', action);
        for (const [key, value] of Object.entries(extra || {})) {
          body.append(key, value);
        }
        output.textContent = 'Working...';
        const res = await fetch('/functions/google-drive-upload', {
          method: 'POST',
          headers: {
            Authorization: 'Bearer ' + document.getElementById('token').value
          },
          body
        });
        const data = await res.json();
        output.textContent = res.ok
          ? JSON.stringify(data, null, 2)
          : 'Error: ' + data.error;
        if (res.ok) {
          form.reset();
          loadAlbumOptions();
        }
      }

      document.getElementById('album-form').onsubmit = async (event) => {
        event.preventDefault();
        const codeRes = await fetch('/api/access-code');
        const { access_code } = await codeRes.json();
        await submitForm(event.target, 'create_album', { accessCode: access_code });
      };
      document.getElementById('photos-form').onsubmit = async (event) => {
        event.preventDefault();
        await submitForm(event.target, 'upload_photos');
      };
      loadAlbumOptions();
    </script>
"""
