from braviactl.cli import main

raise SystemExit(main())
