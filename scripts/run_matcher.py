# scripts/run_matcher.py
from talent_matcher.main import main


if __name__ == "__main__":
    main()
