#!/usr/bin/env python3
"""
Password Policy Checker CLI
Features:
  ✅ Prints password strength score table
  ✅ Checks a password against a policy (JSON file or defaults)
  ✅ Optional common-password wordlist (exact matches)
  ✅ Lists every violated rule with a hint
"""

import sys, json, argparse, getpass, logging
from colorama import Fore, Style, init
from pw_core import EXAMPLE_PASSWORDS, describe, evaluate, normalize_text, suggestions
from pw_patterns import DEFAULT_CATALOG, DEFAULT_MAX_WORDLIST_LINES, load_wordlist
from pw_policy import DEFAULT_SETTINGS, normalize, validate_config
from pw_strength import TIER_LABELS, score, tier

init(autoreset=True)
logging.basicConfig(level=logging.INFO)
log = logging.getLogger("pw_cli")

VERSION = "v1.0.0"

# ==============================
# Score Table (printed at start)
# ==============================
SCORE_TABLE = f"""
{Fore.CYAN}=== PASSWORD STRENGTH SCORE TABLE ==={Style.RESET_ALL}
Each satisfied criterion adds points (max = 100)

| Criterion                               | Points         |
|----------------------------------------|:--------------:|
| Length                                 | 2/char, max 25 |
| Contains uppercase letter              |  +10           |
| Contains lowercase letter              |  +10           |
| Contains digit                         |  +10           |
| Contains symbol (!@#$%^&* etc.)        |  +10           |
| All four classes and length >= 16      |  +35           |

{Fore.YELLOW}A strong password scores above 60; very strong above 80.{Style.RESET_ALL}
"""

# ==============================
# Helper: load policy settings
# ==============================
def load_settings(path: str = None, min_length: int = None) -> dict:
    """Return raw policy settings from a JSON file, falling back to defaults."""
    settings = dict(DEFAULT_SETTINGS)
    if path:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                loaded = json.load(fh)
            if not isinstance(loaded, dict):
                raise ValueError("policy file must hold a JSON object")
            settings = loaded
        except (OSError, ValueError) as e:
            log.error("Could not read policy file %s: %s", path, e)
            print(Fore.RED + f"[!] Policy file ignored ({e}); using defaults" + Style.RESET_ALL)
    if min_length is not None:
        settings = {**settings, "min_length": min_length}
    return settings

# ==============================
# Argument parsing
# ==============================
def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Password Policy Checker CLI")
    ap.add_argument("--policy", "-p", help="Path to a JSON policy file (flat settings object)")
    ap.add_argument("--min-length", type=int, help="Override min_length from the policy")
    ap.add_argument("--common-list", "-w", help="Path to a common-password wordlist (one per line)")
    ap.add_argument("--max-lines", "-m", type=int, default=DEFAULT_MAX_WORDLIST_LINES, help="Max lines to load from wordlist")
    ap.add_argument("--examples", action="store_true", help="Show example strong passwords and exit")
    return ap.parse_args(argv)

# ==============================
# Main logic
# ==============================
def main(argv=None) -> int:
    args = parse_args(argv)

    # Always print score table at start
    print(SCORE_TABLE)
    print(Fore.CYAN + f"Password Policy CLI {VERSION}" + Style.RESET_ALL)

    if args.examples:
        print(Fore.CYAN + "\n=== Example strong passwords ===" + Style.RESET_ALL)
        for example in EXAMPLE_PASSWORDS:
            print("  " + example)
        return 0

    settings = load_settings(args.policy, args.min_length)
    for problem in validate_config(settings):
        log.warning("Policy setting repaired: %s", problem)
    policy = normalize(settings)

    catalog = DEFAULT_CATALOG
    if args.common_list:
        words = load_wordlist(args.common_list, max_lines=args.max_lines)
        catalog = catalog.extended(words)
        print(Fore.GREEN + f"[+] Loaded {len(words):,} wordlist entries" + Style.RESET_ALL)

    print(Fore.CYAN + "\n=== Password Policy Check ===" + Style.RESET_ALL)
    password = normalize_text(getpass.getpass("Enter password: "))
    if not password:
        # blank input is never checked by the evaluator
        print(Fore.RED + "[✗] Password is required." + Style.RESET_ALL)
        return 1

    violations = evaluate(password, policy, catalog)
    value = score(password)
    label, _ = TIER_LABELS[tier(value)]
    print(Fore.CYAN + f"Score: {value}/100 ({label})" + Style.RESET_ALL)

    if not violations:
        print(Fore.GREEN + "[✓] Password meets all requirements." + Style.RESET_ALL)
        return 0

    for v in violations:
        print(Fore.RED + "[✗] " + describe(v, policy) + Style.RESET_ALL)
    for hint in suggestions(password, violations, policy):
        print(Fore.YELLOW + "  - " + hint + Style.RESET_ALL)
    return 1


if __name__ == "__main__":
    sys.exit(main())
