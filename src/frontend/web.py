from __future__ import annotations
import argparse
import sys
from flask import Flask, request, jsonify, Response
from headlines import Engine, ChainError
from headlines import config as CFG

app = Flask(__name__)
_engine: Engine | None = None

# ---------- API ----------
@app.get("/api/generate")
def api_generate():
    if _engine is None or not _engine.ready:
        return jsonify({"error": "engine not initialized"}), 503
    n = request.args.get("n", CFG.COUNT, type=int)
    max_length = request.args.get("max", CFG.MAX_LENGTH, type=int)
    if not 1 <= n <= CFG.MAX_COUNT:
        return jsonify({"error": f"n must be between 1 and {CFG.MAX_COUNT}"}), 400
    if max_length < _engine.stats().prefix_length:
        return jsonify({"error": "max must be at least the chain's prefix length"}), 400
    if max_length > CFG.MAX_LENGTH_LIMIT:
        return jsonify({"error": f"max must be at most {CFG.MAX_LENGTH_LIMIT}"}), 400
    try:
        rows = _engine.generate(max_length, count=n)
    except ChainError as exc:
        return jsonify({"error": str(exc)}), 409
    return jsonify(rows)

@app.get("/health")
def health():
    if _engine is None or not _engine.ready:
        return jsonify({"ok": False}), 503
    stats = _engine.stats()
    return jsonify({"ok": True, **stats.__dict__})

# ---------- UI ----------
@app.get("/")
def home():
    # Minimal page: one button, a max-length box, plain fetch().
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Headlines • Phrase generator</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Arial; }
.container{ max-width:860px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0; }
.controls{ display:flex; gap:12px; align-items:center; margin:12px 0; flex-wrap:wrap; }
input{ width:72px; padding:8px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); text-align:center; }
.btn{ padding:10px 14px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); cursor:pointer; }
.btn:hover{ border-color:var(--accent) }
.err{ display:none; margin-top:12px; color:#ffb0b0; }
ol{ margin:12px 0 0 0; padding-left:24px }
li{ padding:6px 0; border-top:1px solid var(--border) }
.muted{ color:var(--muted); font-size:13px }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Headlines</h1>
      <div class="controls">
        <button id="go" class="btn">Generate</button>
        <label class="muted">Phrases <input id="n" type="number" min="1" max="50" value="5" /></label>
        <label class="muted">Max tokens <input id="max" type="number" min="1" max="1000" value="20" /></label>
      </div>
      <div id="stats" class="muted">Ready.</div>
      <div id="err" class="err"></div>
      <ol id="out"></ol>
    </div>
  </div>
<script>
const $ = (sel) => document.querySelector(sel);
async function generate(){
  $("#err").style.display = "none";
  try{
    const resp = await fetch(`/api/generate?n=${$("#n").value}&max=${$("#max").value}`);
    const data = await resp.json();
    if(!resp.ok) throw new Error(data.error || `HTTP ${resp.status}`);
    $("#out").innerHTML = data.map(r => `<li>${r.text.replace(/</g,"&lt;")} <span class="muted">(${r.length})</span></li>`).join("");
    $("#stats").textContent = `Phrases: ${data.length}`;
  }catch(e){
    $("#err").style.display = "block";
    $("#err").textContent = `Error: ${e.message ?? e}`;
  }
}
$("#go").addEventListener("click", generate);
window.addEventListener("keydown", (ev)=>{ if(ev.key === "Enter") generate(); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--corpus", required=True, help="Corpus file, folder, or '-' for stdin")
    ap.add_argument("-p", "--prefix-length", type=int, default=CFG.PREFIX_LENGTH)
    ap.add_argument("--seed", type=int, default=CFG.SEED)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    try:
        _engine.build(args.corpus, prefix_length=args.prefix_length, seed=args.seed, verbose=args.verbose)
    except OSError as exc:
        print(f"error: cannot read corpus: {exc}", file=sys.stderr)
        return 2

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
