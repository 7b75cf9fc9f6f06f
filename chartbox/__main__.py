from chartbox.cli import main

raise SystemExit(main())
