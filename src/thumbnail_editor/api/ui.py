"""Single-page editor UI served at the root path."""

EDITOR_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Thumbnail Editor</title>
    <style>
      * { box-sizing: border-box; }
      body { margin: 0; height: 100vh; display: flex; flex-direction: column;
             font-family: ui-sans-serif, system-ui, sans-serif;
             background: #111827; color: #f9fafb; }
      header { padding: 1rem; text-align: center; border-bottom: 1px solid #374151; }
      main { flex: 1; display: flex; overflow: hidden; }
      #canvas { width: 60%; display: flex; flex-direction: column; align-items: center;
                justify-content: center; padding: 1rem; border-right: 1px solid #374151; }
      #canvas img { max-width: 100%; max-height: 75vh; border-radius: 6px; }
      #empty { border: 2px dashed #4b5563; border-radius: 8px; padding: 3rem;
               text-align: center; color: #9ca3af; }
      .toolbar { display: flex; gap: 0.5rem; margin-top: 1rem; }
      button { padding: 0.5rem 1rem; border: 0; border-radius: 6px; cursor: pointer;
               background: #4b5563; color: #fff; font-weight: 600; }
      button.primary { background: #7c3aed; }
      button.send { background: #2563eb; }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      #side { width: 40%; display: flex; flex-direction: column; background: #1f2937; }
      #chat { flex: 1; overflow-y: auto; padding: 1rem; }
      .entry { display: flex; margin-bottom: 1rem; }
      .entry.user { justify-content: flex-end; }
      .bubble { max-width: 80%; padding: 0.75rem; border-radius: 8px; background: #374151; }
      .entry.user .bubble { background: #2563eb; }
      .bubble img { max-width: 100%; border-radius: 6px; display: block; }
      .bubble img + p, .bubble p + img { margin-top: 0.5rem; }
      .bubble p { margin: 0; }
      #composer { padding: 1rem; border-top: 1px solid #374151; }
      #error { display: none; background: #7f1d1d; border: 1px solid #b91c1c;
               color: #fecaca; padding: 0.5rem; border-radius: 6px; margin-bottom: 0.5rem; }
      .row { display: flex; gap: 0.5rem; align-items: center;
             background: #374151; padding: 0.5rem; border-radius: 6px; }
      #prompt { flex: 1; background: transparent; border: 0; color: #fff; outline: none; }
      #pending { display: none; margin-top: 0.5rem; align-items: center; gap: 0.5rem;
                 background: #374151; padding: 0.5rem; border-radius: 6px; }
      #pending img { width: 48px; height: 48px; object-fit: cover; border-radius: 4px; }
      #pending span { flex: 1; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
    </style>
  </head>
  <body>
    <header><h1>Thumbnail Editor</h1></header>
    <main>
      <section id="canvas">
        <div id="empty">
          <h2>Upload a Thumbnail</h2>
          <p>Select an image to start editing.</p>
          <button class="primary" onclick="pickBase()">Upload Image</button>
        </div>
        <div id="viewer" style="display: none; text-align: center;">
          <img id="current" alt="Current thumbnail" />
          <div class="toolbar">
            <button class="primary" onclick="pickBase()">New</button>
            <button id="undo" onclick="post('/api/session/undo')">Undo</button>
            <button id="redo" onclick="post('/api/session/redo')">Redo</button>
            <button onclick="download()">Download</button>
          </div>
        </div>
        <input id="base-file" type="file" accept="image/*" hidden />
      </section>
      <section id="side">
        <div id="chat"></div>
        <div id="composer">
          <div id="error" role="alert"></div>
          <div class="row">
            <button id="attach" onclick="pickContext()" aria-label="Attach context image">+</button>
            <input id="context-file" type="file" accept="image/*" hidden />
            <input id="prompt" type="text" placeholder="Describe your edit..." />
            <button id="send" class="send" onclick="submitEdit()">Send</button>
          </div>
          <div id="pending">
            <img id="pending-preview" alt="Context preview" />
            <span id="pending-name"></span>
            <button onclick="discardContext()" aria-label="Remove context image">x</button>
          </div>
        </div>
      </section>
    </main>
    <script>
      let state = null;
      let busy = false;
      let optimisticId = null;
      const rendered = new Map();

      async function request(path, options) {
        const res = await fetch(path, { credentials: 'same-origin', ...options });
        const contentType = res.headers.get('content-type') || '';
        if (contentType.includes('application/json')) {
          render(await res.json());
        } else if (!res.ok) {
          showError('Request failed: ' + res.status);
        }
        return res;
      }

      function post(path) {
        return request(path, { method: 'POST' });
      }

      function upload(path, file) {
        const body = new FormData();
        body.append('file', file);
        return request(path, { method: 'POST', body });
      }

      function pickBase() { document.getElementById('base-file').click(); }
      function pickContext() { document.getElementById('context-file').click(); }

      document.getElementById('base-file').addEventListener('change', async (event) => {
        const file = event.target.files[0];
        event.target.value = '';
        if (file) {
          busy = true;
          updateControls();
          try { await upload('/api/session/image', file); } finally { busy = false; updateControls(); }
        }
      });

      document.getElementById('context-file').addEventListener('change', async (event) => {
        const file = event.target.files[0];
        event.target.value = '';
        if (file) { await upload('/api/session/context', file); }
      });

      function discardContext() {
        return request('/api/session/context', { method: 'DELETE' });
      }

      async function submitEdit() {
        const input = document.getElementById('prompt');
        if (busy || !state || !state.can_edit || !input.value.trim()) { return; }
        const prompt = input.value;
        busy = true;
        optimistic(prompt);
        try {
          await request('/api/session/edits', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ prompt }),
          });
        } finally {
          busy = false;
          input.value = '';
          updateControls();
        }
      }

      function optimistic(prompt) {
        const pending = state.pending_context;
        const id = 'pending-' + Date.now();
        optimisticId = id;
        appendEntry({ id, type: 'user', prompt,
                      context_image_url: pending ? pending.preview_url : null });
        document.getElementById('pending').style.display = 'none';
        updateControls();
      }

      function download() {
        window.location.href = '/api/session/download';
      }

      function showError(message) {
        const el = document.getElementById('error');
        el.textContent = message ? 'Error: ' + message : '';
        el.style.display = message ? 'block' : 'none';
      }

      function entryNode(entry) {
        const row = document.createElement('div');
        row.className = 'entry ' + entry.type;
        const bubble = document.createElement('div');
        bubble.className = 'bubble';
        if (entry.type === 'bot' && entry.image_url) {
          const img = document.createElement('img');
          img.src = entry.image_url;
          img.alt = 'AI response';
          bubble.appendChild(img);
        }
        if (entry.prompt) {
          const p = document.createElement('p');
          p.textContent = entry.prompt;
          bubble.appendChild(p);
        }
        if (entry.context_image_url) {
          const img = document.createElement('img');
          img.src = entry.context_image_url;
          img.alt = 'User context';
          img.onerror = () => { img.style.display = 'none'; };
          bubble.appendChild(img);
        }
        row.appendChild(bubble);
        return row;
      }

      function appendEntry(entry) {
        const chat = document.getElementById('chat');
        const node = entryNode(entry);
        rendered.set(entry.id, node);
        chat.appendChild(node);
        chat.scrollTop = chat.scrollHeight;
      }

      function renderEntries(entries) {
        const chat = document.getElementById('chat');
        if (optimisticId) {
          const node = rendered.get(optimisticId);
          const adopted = entries.find((entry) => entry.type === 'user' && !rendered.has(entry.id));
          rendered.delete(optimisticId);
          if (node && adopted) { rendered.set(adopted.id, node); } else if (node) { node.remove(); }
          optimisticId = null;
        }
        const keep = new Set(entries.map((entry) => entry.id));
        for (const [id, node] of rendered) {
          if (!keep.has(id)) {
            node.remove();
            rendered.delete(id);
          }
        }
        for (const entry of entries) {
          const node = rendered.get(entry.id) || entryNode(entry);
          rendered.set(entry.id, node);
          chat.appendChild(node);
        }
        chat.scrollTop = chat.scrollHeight;
      }

      function render(next) {
        state = next;
        const hasImage = Boolean(state.current_image);
        document.getElementById('empty').style.display = hasImage ? 'none' : 'block';
        document.getElementById('viewer').style.display = hasImage ? 'block' : 'none';
        if (hasImage) { document.getElementById('current').src = state.current_image; }
        renderEntries(state.entries);
        showError(state.error);
        const pending = document.getElementById('pending');
        if (state.pending_context) {
          document.getElementById('pending-preview').src = state.pending_context.preview_url;
          document.getElementById('pending-name').textContent = state.pending_context.filename;
          pending.style.display = 'flex';
        } else {
          pending.style.display = 'none';
        }
        updateControls();
      }

      function updateControls() {
        const editable = Boolean(state && state.can_edit) && !busy;
        const prompt = document.getElementById('prompt');
        document.getElementById('undo').disabled = !(state && state.can_undo) || busy;
        document.getElementById('redo').disabled = !(state && state.can_redo) || busy;
        document.getElementById('attach').disabled = !editable;
        prompt.disabled = !editable;
        document.getElementById('send').disabled = !editable || !prompt.value.trim();
        document.getElementById('send').textContent = busy ? '...' : 'Send';
      }

      document.getElementById('prompt').addEventListener('input', updateControls);
      document.getElementById('prompt').addEventListener('keydown', (event) => {
        if (event.key === 'Enter') { submitEdit(); }
      });

      request('/api/session');
    </script>
  </body>
</html>
"""
