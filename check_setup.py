"""
Simple script to verify browser setup and dependencies.
"""

import sys

def check_dependencies():
    """Check if all required dependencies are installed."""
    print("Checking dependencies...\n")

    dependencies = {
        'bs4': 'beautifulsoup4',
        'lxml': 'lxml',
        'curl_cffi': 'curl-cffi',
        'yaml': 'PyYAML',
        'pydantic': 'pydantic',
        'fastapi': 'fastapi'
    }

    missing = []
    installed = []

    for module, package in dependencies.items():
        try:
            __import__(module)
            installed.append(f"✓ {package}")
        except ImportError:
            missing.append(f"✗ {package}")

    for item in installed:
        print(item)

    if missing:
        print("\nMissing dependencies:")
        for item in missing:
            print(item)
        print("\nInstall missing dependencies with:")
        print("  pip install -e .")
        return False

    print("\n✓ All dependencies installed!")
    return True


def check_basic_functionality():
    """Run the extractors and pager on a tiny document."""
    print("\nTesting basic functionality...\n")

    try:
        from extractors import html_to_text, parse_search_results, sanitize_url
        from navigation import ResultPager

        text = html_to_text("<body><script>alert(1)</script><p>A</p><p>B</p></body>")
        assert text == "A\nB", "Text extraction failed"

        url = sanitize_url("https://example.com/?id=1&utm_source=x")
        assert url == "https://example.com/?id=1", "URL sanitizing failed"

        results = parse_search_results(
            '<a href="/l/?uddg=https%3A%2F%2Fexample.com%2Fpage">Example</a>',
            "https://duckduckgo.com"
        )
        assert results and results[0].url == "https://example.com/page", "Redirect unwrapping failed"

        pager = ResultPager()
        pager.load(results)
        assert pager.resolve_index(1).title == "Example", "Pagination failed"

        print("✓ Basic functionality tests passed!")
        return True

    except Exception as e:
        print(f"✗ Functionality test failed: {e}")
        return False


def main():
    """Run all checks."""
    print("=" * 60)
    print("Browser Setup Verification")
    print("=" * 60)
    print()

    results = []

    results.append(check_dependencies())
    results.append(check_basic_functionality())

    print("\n" + "=" * 60)
    if all(results):
        print("✓ All checks passed! Browser is ready to use.")
        print("\nTry running:")
        print("  python browser.py --url https://example.com")
    else:
        print("✗ Some checks failed. Please fix the issues above.")
        sys.exit(1)
    print("=" * 60)


if __name__ == "__main__":
    main()
