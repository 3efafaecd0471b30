#!/usr/bin/env python3
"""
Styled Password Policy web UI
- Show/hide password
- Logo + version badge
- Policy toggles + min length per check
- File upload for a common-password wordlist (uploads/)
- JSON endpoint for hosts: POST /api/check
"""
import os
import json
import argparse
import logging
import threading
import time
import webbrowser
from collections.abc import Mapping
from flask import Flask, request, render_template_string, jsonify
from werkzeug.utils import secure_filename

from pw_core import describe, evaluate, normalize_text, suggestions
from pw_patterns import DEFAULT_CATALOG, DEFAULT_MAX_WORDLIST_LINES, load_wordlist
from pw_policy import DEFAULT_SETTINGS, normalize, validate_config
from pw_strength import TIER_LABELS, score, tier

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("pw_web")

VERSION = "v1.0.0"
UPLOAD_DIR = "uploads"

RULE_FIELDS = (
    ("enabled", "Policy enabled"),
    ("require_uppercase", "Require uppercase (A-Z)"),
    ("require_lowercase", "Require lowercase (a-z)"),
    ("require_numbers", "Require digit (0-9)"),
    ("require_special_chars", "Require special character"),
    ("prevent_common_passwords", "Block common passwords"),
    ("prevent_sequential_chars", "Block sequential runs"),
    ("prevent_keyboard_patterns", "Block keyboard patterns"),
    ("prevent_repetitive_chars", "Block repeated characters"),
)

TEMPLATE = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Password Policy • Local</title>
<style>
:root{--bg:#0f172a;--card:#0b1220;--muted:#94a3b8;--text:#e5e7eb;--accent:#4f46e5;--border:#1f2937}
*{box-sizing:border-box}html,body{height:100%}body{margin:0;background:radial-gradient(1200px 600px at -10% -10%, #15213b 0, transparent 60%), radial-gradient(800px 500px at 120% 0, #1a2440 0, transparent 55%),var(--bg);color:var(--text);font:16px/1.5 system-ui, -apple-system, Segoe UI, Roboto, Ubuntu, "Helvetica Neue", Arial}
.container{max-width:1000px;margin:0 auto;padding:24px}
.header{display:flex;align-items:center;justify-content:space-between;background:linear-gradient(135deg, rgba(79,70,229,.12), rgba(34,197,94,.07));border:1px solid var(--border);border-radius:12px;padding:12px 16px}
.brand{display:flex;gap:12px;align-items:center}
.logo{width:40px;height:40px;display:inline-block}
.brand h1{margin:0;font-size:18px}
.version{background:#0b1220;border:1px solid var(--border);padding:6px 10px;border-radius:999px;font-size:13px;color:var(--muted)}
.grid{display:grid;grid-template-columns:1fr 380px;gap:16px;margin-top:16px}
@media (max-width:900px){.grid{grid-template-columns:1fr}}
.card{background:var(--card);border:1px solid var(--border);border-radius:12px;padding:16px}
label{display:block;font-size:13px;color:var(--muted);margin:10px 0 6px}
input[type=text],input[type=password],input[type=number],input[type=file]{width:100%;background:#08101a;color:var(--text);border:1px solid var(--border);border-radius:8px;padding:8px 10px}
.row{display:flex;gap:8px;align-items:center}
.small{font-size:12px;color:var(--muted)}
.btn{display:inline-flex;align-items:center;gap:8px;background:linear-gradient(180deg,var(--accent),#4338ca);color:white;padding:8px 12px;border:none;border-radius:8px;cursor:pointer}
.btn.secondary{background:#07101a;color:var(--text);border:1px solid var(--border)}
.meter{height:10px;background:#07101a;border:1px solid var(--border);border-radius:999px;overflow:hidden}
.meter>span{display:block;height:100%;width:0%;transition:width .25s}
.meter.ok>span{background:linear-gradient(90deg,#22c55e,#16a34a)}.meter.mid>span{background:linear-gradient(90deg,#f59e0b,#d97706)}.meter.bad>span{background:linear-gradient(90deg,#ef4444,#dc2626)}
.banner{border-radius:8px;padding:10px;margin-top:12px;border:1px solid var(--border)}
.banner.ok{background:#052e1a}.banner.err{background:#2a0f12}
ul.violations{margin:8px 0 0 0;padding-left:18px;font-size:13px}
.footer{margin-top:12px;color:var(--muted);font-size:12px}
</style>
</head>
<body>
  <div class="container">
    <div class="header">
      <div class="brand">
        <svg class="logo" viewBox="0 0 100 100" xmlns="http://www.w3.org/2000/svg" aria-hidden="true">
          <defs><linearGradient id="g" x1="0" x2="1"><stop offset="0" stop-color="#6366f1"/><stop offset="1" stop-color="#22c55e"/></linearGradient></defs>
          <rect rx="18" ry="18" width="100" height="100" fill="#08101a"/>
          <path d="M30 55 Q 45 20 70 55" stroke="url(#g)" stroke-width="8" fill="none" stroke-linecap="round" stroke-linejoin="round"/>
          <circle cx="50" cy="70" r="8" fill="url(#g)"/>
        </svg>
        <div>
          <h1>Password Policy</h1>
          <div class="small">Local password policy & pattern checks</div>
        </div>
      </div>
      <div class="version">{{version}}</div>
    </div>

    <div class="grid">
      <div class="card">
        <h2>Check a Password</h2>
        <form method="post" action="/check" id="pwform" enctype="multipart/form-data">
          <label>Password</label>
          <div class="row">
            <input type="password" name="password" id="password" placeholder="Type a candidate password" autocomplete="new-password">
            <button type="button" class="btn secondary" id="toggle">Show</button>
          </div>
          <div class="meter bad" id="meter"><span></span></div>
          <div class="small" id="scoreLine">Score: 0 / 100</div>

          <hr>

          <label>Minimum length (1-50)</label>
          <input type="number" name="min_length" value="{{policy.min_length}}">
          {% for name, text in rule_fields %}
          <label class="small">
            <input type="checkbox" name="{{name}}" value="1" {% if policy[name] %}checked{% endif %}> {{text}}
          </label>
          {% endfor %}

          <hr>

          <label>Upload a common-password wordlist (optional, used for this check)</label>
          <input type="file" name="wordlist_file" accept=".txt">

          <label>Or wordlist path (optional)</label>
          <input type="text" name="wordlist_path" value="{{wordlist_path}}">

          <label>Max lines</label>
          <input type="number" name="max_lines" value="{{max_lines}}">

          <div style="margin-top:12px">
            <button class="btn" type="submit">Check</button>
            <button class="btn secondary" type="button" id="resetBtn">Reset</button>
            <div class="small" style="margin-top:8px">All processing is local. Uploaded wordlists are stored under <span class="small mono">uploads/</span>.</div>
          </div>
        </form>
      </div>

      <div class="card">
        <h2>Status</h2>
        <div class="small">Wordlist: <span class="mono">{{wordlist_path or 'None'}}</span></div>

        {% if result %}
          <div class="banner {% if accepted %}ok{% else %}err{% endif %}">
            <div><strong>{{ 'Accepted' if accepted else 'Rejected' }}</strong></div>
            <div class="small">Server score: <strong>{{score}} / 100</strong> • <span style="color:{{tier_color}}">{{tier_label}}</span></div>
            {% if messages %}
            <ul class="violations">
              {% for message in messages %}<li>{{message}}</li>{% endfor %}
            </ul>
            {% endif %}
            {% if hints %}
            <ul class="violations small">
              {% for hint in hints %}<li>{{hint}}</li>{% endfor %}
            </ul>
            {% endif %}
          </div>
        {% else %}
          <div class="small" style="margin-top:8px;color:var(--muted)">Submit a password to see the server decision here.</div>
        {% endif %}

        {% if problems %}
          <hr>
          <div class="small">Policy settings repaired:</div>
          <ul class="violations small">
            {% for problem in problems %}<li>{{problem}}</li>{% endfor %}
          </ul>
        {% endif %}

        <hr>
        <div class="small">Common passwords loaded: <span class="mono">{{loaded}}</span></div>
      </div>
    </div>

    <div class="footer">© local demo UI</div>
  </div>
<script>
document.addEventListener('DOMContentLoaded', function(){
  const pwd = document.getElementById('password');
  const meter = document.getElementById('meter');
  const bar = meter ? meter.querySelector('span') : null;
  const line = document.getElementById('scoreLine');
  const toggle = document.getElementById('toggle');
  const resetBtn = document.getElementById('resetBtn');

  // same weights as pw_strength.score
  function score(p){
    if (!p) return 0;
    let s = Math.min(p.length * 2, 25);
    let classes = 0;
    if (/[A-Z]/.test(p)) classes++;
    if (/[a-z]/.test(p)) classes++;
    if (/[0-9]/.test(p)) classes++;
    if (/[!@#$%^&*()_+\-=\[\]{};':"\\|,.<>\/?]/.test(p)) classes++;
    s += classes * 10;
    if (classes === 4 && p.length >= 16) s += 35;
    return Math.min(s, 100);
  }

  function render(){
    const s = score(pwd ? pwd.value : "");
    if (bar) bar.style.width = s + "%";
    if (meter) {
      meter.classList.remove('ok','mid','bad');
      meter.classList.add(s>60 ? 'ok' : (s>40 ? 'mid' : 'bad'));
    }
    if (line) line.textContent = "Score: " + s + " / 100";
  }

  if (pwd){
    pwd.addEventListener('input', render);
    render(); // initial
  }

  if (toggle){
    toggle.addEventListener('click', function(ev){
      ev.preventDefault();
      if (!pwd) return;
      pwd.type = (pwd.type === 'password') ? 'text' : 'password';
      toggle.textContent = (pwd.type === 'password') ? 'Show' : 'Hide';
      pwd.focus();
    });
  }

  if (resetBtn){
    resetBtn.addEventListener('click', function(ev){
      ev.preventDefault();
      const form = document.getElementById('pwform');
      if (form) form.reset();
      render();
    });
  }
});
</script>


</body>
</html>
"""

def _save_uploaded_file(file_storage):
    """Save uploaded file and return path (or None)."""
    if not file_storage or file_storage.filename == "":
        return None
    filename = secure_filename(file_storage.filename)
    if not filename:
        return None
    os.makedirs(UPLOAD_DIR, exist_ok=True)
    dest = os.path.join(UPLOAD_DIR, filename)
    file_storage.save(dest)
    return dest

def _policy_from_form(form):
    raw = {name: form.get(name) for name, _ in RULE_FIELDS}
    raw["min_length"] = form.get("min_length")
    return raw

def _check(password, raw_settings, catalog):
    """Evaluate and shape the result the way both endpoints report it."""
    policy = normalize(raw_settings)
    violations = evaluate(password, policy, catalog)
    value = score(password)
    level = tier(value)
    return {
        "accepted": bool(password) and not violations,
        "violations": [v.value for v in violations],
        "messages": [describe(v, policy) for v in violations],
        "hints": suggestions(password, violations, policy) if violations else [],
        "score": value,
        "tier": level.value,
    }

def create_app(settings=None, wordlist=None, max_lines=DEFAULT_MAX_WORDLIST_LINES):
    app = Flask(__name__)
    if settings is None:
        settings = DEFAULT_SETTINGS
    elif not isinstance(settings, Mapping):
        log.warning("Policy settings must be a JSON object (got %s); using defaults", type(settings).__name__)
        settings = DEFAULT_SETTINGS
    app.config["POLICY_SETTINGS"] = dict(settings)
    app.config["WORDSET"] = load_wordlist(wordlist, max_lines) if wordlist else set()
    app.config["WORDLIST_PATH"] = wordlist or ""
    app.config["MAX_LINES"] = max_lines
    app.config["CATALOG"] = DEFAULT_CATALOG.extended(app.config["WORDSET"])

    for problem in validate_config(app.config["POLICY_SETTINGS"]):
        log.warning("Policy setting repaired: %s", problem)

    def render(**context):
        values = dict(
            policy=normalize(app.config["POLICY_SETTINGS"]).as_settings(),
            rule_fields=RULE_FIELDS,
            wordlist_path=app.config["WORDLIST_PATH"],
            max_lines=app.config["MAX_LINES"],
            loaded=len(app.config["CATALOG"].common_passwords),
            result=None, accepted=False, score=0, messages=[], hints=[], problems=[],
            version=VERSION,
        )
        values.update(context)
        return render_template_string(TEMPLATE, **values)

    @app.route("/", methods=["GET"])
    def index():
        return render()

    @app.route("/check", methods=["POST"])
    def check():
        uploaded = request.files.get("wordlist_file")
        uploaded_path = _save_uploaded_file(uploaded)
        path_field = (request.form.get("wordlist_path", "") or app.config["WORDLIST_PATH"]).strip()
        wordlist_path_to_use = uploaded_path or path_field or ""
        try:
            max_lines = int(request.form.get("max_lines") or app.config["MAX_LINES"])
        except ValueError:
            max_lines = app.config["MAX_LINES"]

        raw = _policy_from_form(request.form)
        problems = validate_config(raw)
        for problem in problems:
            log.warning("Policy setting repaired: %s", problem)

        catalog = app.config["CATALOG"]
        if wordlist_path_to_use and wordlist_path_to_use != app.config["WORDLIST_PATH"]:
            catalog = catalog.extended(load_wordlist(wordlist_path_to_use, max_lines))

        password = normalize_text(request.form.get("password", ""))
        outcome = _check(password, raw, catalog)
        if not password:
            outcome["messages"] = ["Password is required."]
        label, color = TIER_LABELS[tier(outcome["score"])]

        return render(
            policy=normalize(raw).as_settings(),
            wordlist_path=wordlist_path_to_use,
            max_lines=max_lines,
            loaded=len(catalog.common_passwords),
            result=True, accepted=outcome["accepted"], score=outcome["score"],
            messages=outcome["messages"], hints=outcome["hints"], problems=problems,
            tier_label=label, tier_color=color,
        )

    @app.route("/api/check", methods=["POST"])
    def api_check():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "expected a JSON object"}), 400
        password = payload.get("password")
        if password is not None and not isinstance(password, str):
            return jsonify({"error": "password must be a string"}), 400
        raw = payload.get("policy")
        if raw is None:
            raw = app.config["POLICY_SETTINGS"]
        outcome = _check(password or "", raw, app.config["CATALOG"])
        outcome["problems"] = validate_config(raw)
        return jsonify(outcome)

    return app

def main():
    ap = argparse.ArgumentParser(description="Password Policy - Local Web UI")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=5000)
    ap.add_argument("--policy", "-p", help="JSON policy file (flat settings object); defaults otherwise")
    ap.add_argument("--common-list", "-w", help="Default common-password wordlist path.")
    ap.add_argument("--max-lines", "-m", type=int, default=DEFAULT_MAX_WORDLIST_LINES)
    ap.add_argument("--no-browser", action="store_true")
    args = ap.parse_args()

    settings = None
    if args.policy:
        try:
            with open(args.policy, "r", encoding="utf-8") as fh:
                settings = json.load(fh)
        except (OSError, ValueError) as e:
            log.error("Could not read policy file %s: %s; using defaults", args.policy, e)

    app = create_app(settings, wordlist=args.common_list, max_lines=args.max_lines)

    url = f"http://{args.host}:{args.port}/"
    if not args.no_browser:
        threading.Thread(target=lambda: (time.sleep(0.6), webbrowser.open(url)), daemon=True).start()

    app.run(host=args.host, port=args.port, debug=False, threaded=True)

if __name__ == "__main__":
    main()
